"""
    Low level access to the Flickr REST endpoint.

    call_api sends one request and returns the parsed XML response
    document. The configuration (keys, token, endpoint) is kept in
    module globals and set with set_keys.
"""
import hashlib
import logging
import os

import requests
from lxml import etree

from .base import FleakrError,RemoteError,ApiError,to_int

log = logging.getLogger(__name__)

ENDPOINT = "https://api.flickr.com/services/rest/"
TIMEOUT = 30

API_KEY = os.environ.get("FLEAKR_API_KEY")
SHARED_SECRET = os.environ.get("FLEAKR_SHARED_SECRET")
AUTH_TOKEN = None

def set_keys(api_key,shared_secret = None,auth_token = None):
    global API_KEY,SHARED_SECRET,AUTH_TOKEN
    API_KEY = api_key
    SHARED_SECRET = shared_secret
    AUTH_TOKEN = auth_token

def api_sig(params,secret):
    """
        Signature of a call as described in
        http://www.flickr.com/services/api/auth.spec.html#signing
    """
    s = secret + "".join("%s%s"%(k,v) for k,v in sorted(params.items()))
    return hashlib.md5(s.encode("utf8")).hexdigest()

def build_params(method,**params):
    if API_KEY is None :
        raise FleakrError("No API key set, use fleakr.set_keys(api_key)")
    if not method.startswith("flickr.") :
        method = "flickr." + method
    args = dict((k,str(v)) for k,v in params.items() if v is not None)
    args["method"] = method
    args["api_key"] = API_KEY
    if AUTH_TOKEN is not None :
        args["auth_token"] = AUTH_TOKEN
    if SHARED_SECRET is not None :
        args["api_sig"] = api_sig(args,SHARED_SECRET)
    return args

def parse_response(content):
    """
        Parses a REST response body into an lxml document and raises
        ApiError when Flickr reports a failure.
    """
    try :
        root = etree.fromstring(content)
    except etree.XMLSyntaxError as e :
        raise RemoteError("Malformed response: %s"%e) from e
    if root.tag != "rsp" :
        raise RemoteError("Unexpected response root <%s>"%root.tag)
    if root.get("stat") == "fail" :
        err = root.find("err")
        if err is None :
            raise ApiError(0,"Unknown error")
        raise ApiError(to_int(err.get("code")),err.get("msg",""))
    return root.getroottree()

def call_api(method,**params):
    """
        Calls the given Flickr method ('people.getInfo' or
        'flickr.people.getInfo') and returns the response document.
    """
    args = build_params(method,**params)
    log.debug("call %s %r",args["method"],params)
    try :
        r = requests.get(ENDPOINT,params = args,timeout = TIMEOUT)
        r.raise_for_status()
    except requests.RequestException as e :
        raise RemoteError("%s failed: %s"%(args["method"],e)) from e
    try :
        return parse_response(r.content)
    except ApiError as e :
        log.warning("%s returned error %s",args["method"],e)
        raise
