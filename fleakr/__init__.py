"""
    fleakr: a small object layer over the Flickr API.

    >>> import fleakr
    >>> fleakr.set_keys("<api key>")
    >>> user = fleakr.user("brownout")
    >>> user.name, user.icon_url
    >>> [ s.title for s in user.sets() ]
"""
import logging

from .base import FleakrError,RemoteError,ApiError
from .method_call import set_keys
from .objects import User,Photo,Set,Group,Image,Search

__version__ = "0.4.0"

log = logging.getLogger(__name__)

def user(user_data):
    """
        Finds a user from a username, falling back on a lookup by
        email address when Flickr does not know the username.
    """
    try :
        return User.find_by_username(user_data)
    except ApiError as e :
        log.debug("no user named %r (%s), trying by email",user_data,e)
        return User.find_by_email(user_data)

def search(text = None,tags = None):
    return Search(text = text,tags = tags).results()
