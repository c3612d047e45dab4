"""
    Declarative mapping of XML responses onto Flickr objects.

    Each object class lists its fields in '__attributes__', a table of
    Attribute(name, xpath, attribute) entries. A field may appear more
    than once: the first location holding a value wins, which lets the
    same class be read from a lookup document, an info document or an
    element of a list response.

    Fields listed in '__lazy__' are loaded on first read by calling the
    named loader method once.
"""
import logging
from collections import namedtuple

from lxml import etree

from .base import FleakrError

log = logging.getLogger(__name__)

Attribute = namedtuple("Attribute",["name","xpath","attribute"],defaults = [None])

def extract(document,xpath,attribute = None):
    """
        Returns the text of the first node matching 'xpath' in 'document',
        or the value of its XML attribute 'attribute' when given.
        Returns None when the node or the attribute is missing.
    """
    if isinstance(document,etree._ElementTree) and not xpath.startswith("/"):
        # paths on a whole response are rooted at the document node
        xpath = "/" + xpath
    nodes = document.xpath(xpath)
    if not nodes :
        return None
    node = nodes[0]
    if attribute is None :
        return node.text
    return node.get(attribute)

class FleakrObject(object):
    """
        Base Object for Flickr API Objects
    """
    __attributes__ = []
    __lazy__ = []
    __display__ = []

    def __init__(self,document = None,**params):
        self.__dict__["_loaded"] = set()
        if document is not None :
            self.populate_from(document)
        self._set_properties(**params)

    @classmethod
    def fields(cls):
        names = []
        for a in cls.__attributes__ :
            if a.name not in names :
                names.append(a.name)
        return names

    @classmethod
    def loader_for(cls,name):
        for loader,names in cls.__lazy__ :
            if name in names :
                return loader
        return None

    def _set_properties(self,**params):
        self.__dict__.update((k,v) for k,v in params.items() if v is not None)

    def populate_from(self,document):
        """
            Sets every field found in 'document'. Fields absent from the
            document keep their current value.
        """
        values = {}
        for a in self.__class__.__attributes__ :
            if values.get(a.name) is None :
                values[a.name] = extract(document,a.xpath,a.attribute)
        self._set_properties(**values)

    def is_loaded(self,loader):
        return loader in self._loaded

    def __getattr__(self,name):
        if name.startswith("_") or name not in self.fields() :
            raise AttributeError("'%s' object has no attribute '%s'"%(self.__class__.__name__,name))
        loader = self.loader_for(name)
        if loader is not None and loader not in self._loaded :
            log.debug("%r: loading %s with %s",self,name,loader)
            getattr(self,loader)()
            self._loaded.add(loader)
        return self.__dict__.get(name)

    def __setattr__(self,name,value):
        raise FleakrError("Read-only attribute")

    def get(self,key,default = None):
        try :
            value = getattr(self,key)
        except AttributeError :
            return default
        return default if value is None else value

    def __getitem__(self,key):
        try :
            return getattr(self,key)
        except AttributeError :
            raise KeyError(key)

    def __setitem__(self,key,value):
        raise FleakrError("Read-only attribute")

    def __repr__(self):
        vals = []
        for k in self.__class__.__display__ :
            value = self.__dict__.get(k)
            if value is None : continue
            value = "'%s'"%value if isinstance(value,str) else str(value)
            if len(value) > 20: value = value[:20]+"..."
            vals.append("%s = %s"%(k,value))
        return "%s(%s)"%(self.__class__.__name__,", ".join(vals))
