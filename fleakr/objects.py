# -*- encoding: utf8 -*-
"""
    Object Oriented mapping of the Flickr API.

    Objects are read from the XML documents returned by the API. Fields
    that need an extra call (e.g. the details of a User returned by
    'people.findByUsername') are loaded the first time one of them is
    read. Collections (user.sets(), photo.images(), ...) are fetched
    again on each call.

    >>> user = User.find_by_username("brownout")
    >>> user.id, user.username
    >>> user.icon_url        # calls flickr.people.getInfo once
    >>> user.sets()
"""
import logging
import os

import requests

from . import method_call
from .base import FleakrError,RemoteError,to_bool,to_int
from .decorators import caller
from .support import Attribute,FleakrObject

log = logging.getLogger(__name__)

DEFAULT_ICON_URL = "http://www.flickr.com/images/buddyicon.jpg"
ICON_URL = "http://farm%s.static.flickr.com/%s/buddyicons/%s.jpg"

class User(FleakrObject):
    """
        A Flickr user (people.* methods).

        Fields:
            id : the NSID of the user
            username
            name : full name, if entered
            photos_url : URL of the photostream
            profile_url : URL of the profile page
            photos_count : number of uploaded photos
            icon_server, icon_farm : location of the buddy icon
            pro, admin : raw '0'/'1' flags, see is_pro and is_admin

        id and username come from the lookup call, the other fields
        are loaded with flickr.people.getInfo on first access.
    """
    __attributes__ = [
        Attribute("id","rsp/user","nsid"),
        Attribute("id","self::contact","nsid"),
        Attribute("username","rsp/user/username"),
        Attribute("username","self::contact","username"),
        Attribute("name","rsp/person/realname"),
        Attribute("photos_url","rsp/person/photosurl"),
        Attribute("profile_url","rsp/person/profileurl"),
        Attribute("photos_count","rsp/person/photos/count"),
        Attribute("icon_server","rsp/person","iconserver"),
        Attribute("icon_server","self::contact","iconserver"),
        Attribute("icon_farm","rsp/person","iconfarm"),
        Attribute("icon_farm","self::contact","iconfarm"),
        Attribute("pro","rsp/person","ispro"),
        Attribute("admin","rsp/person","isadmin"),
    ]
    __lazy__ = [
        ("load_info",["name","photos_url","profile_url","photos_count",
                      "icon_server","icon_farm","pro","admin"]),
    ]
    __display__ = ["id","username"]

    @staticmethod
    @caller("people.findByUsername")
    def find_by_username(username):
        """ method: flickr.people.findByUsername """
        return {"username":username},User

    @staticmethod
    @caller("people.findByEmail")
    def find_by_email(email):
        """ method: flickr.people.findByEmail """
        return {"find_email":email},User

    @caller("people.getInfo",self_name = "user_id")
    def load_info(self):
        """ method: flickr.people.getInfo """
        return {},self.populate_from

    @property
    def is_pro(self):
        return to_bool(self.pro)

    @property
    def is_admin(self):
        return to_bool(self.admin)

    @property
    def icon_url(self):
        if to_int(self.icon_server) > 0 :
            return ICON_URL%(self.icon_farm or "",self.icon_server,self.id or "")
        return DEFAULT_ICON_URL

    @caller("photosets.getList",self_name = "user_id")
    def sets(self):
        """ method: flickr.photosets.getList

            The public sets of this user, newest first.
        """
        return {},_extract_list("rsp/photosets/photoset",Set)

    @caller("people.getPublicGroups",self_name = "user_id")
    def groups(self):
        """ method: flickr.people.getPublicGroups """
        return {},_extract_list("rsp/groups/group",Group)

    @caller("people.getPublicPhotos",self_name = "user_id")
    def photos(self):
        """ method: flickr.people.getPublicPhotos

            The public photos of this user, newest first.
        """
        return {},_extract_list("rsp/photos/photo",Photo)

    @caller("contacts.getPublicList",self_name = "user_id")
    def contacts(self):
        """ method: flickr.contacts.getPublicList """
        return {},_extract_list("rsp/contacts/contact",User)

    def search(self,text = None,tags = None):
        """
            Searches the photos of this user. See Search.
        """
        return Search(text = text,tags = tags,user_id = self.id).results()

class Photo(FleakrObject):
    __attributes__ = [
        Attribute("id","self::photo","id"),
        Attribute("id","rsp/photo","id"),
        Attribute("title","self::photo","title"),
        Attribute("title","rsp/photo/title"),
        Attribute("farm","self::photo","farm"),
        Attribute("farm","rsp/photo","farm"),
        Attribute("server","self::photo","server"),
        Attribute("server","rsp/photo","server"),
        Attribute("secret","self::photo","secret"),
        Attribute("secret","rsp/photo","secret"),
        Attribute("owner_id","self::photo","owner"),
        Attribute("owner_id","parent::photoset","owner"),
        Attribute("owner_id","rsp/photo/owner","nsid"),
        Attribute("description","rsp/photo/description"),
        Attribute("posted","rsp/photo/dates","posted"),
        Attribute("taken","rsp/photo/dates","taken"),
        Attribute("updated","rsp/photo/dates","lastupdate"),
    ]
    __lazy__ = [
        ("load_info",["description","posted","taken","updated"]),
    ]
    __display__ = ["id","title"]

    @caller("photos.getInfo",self_name = "photo_id")
    def load_info(self):
        """ method: flickr.photos.getInfo """
        return {},self.populate_from

    @property
    def owner(self):
        if self.owner_id is None :
            return None
        return User(id = self.owner_id)

    @caller("photos.getSizes",self_name = "photo_id")
    def images(self):
        """ method: flickr.photos.getSizes

            The available sizes of this photo as Image objects.
        """
        return {},_extract_list("rsp/sizes/size",Image)

    def image(self,size_label = "Large"):
        """
            Returns the Image for the given size label ('Square',
            'Thumbnail', 'Small', 'Medium', 'Large', 'Original').
        """
        for image in self.images() :
            if image.size == size_label :
                return image
        raise FleakrError("The requested size is not available")

class Set(FleakrObject):
    __attributes__ = [
        Attribute("id","self::photoset","id"),
        Attribute("title","self::photoset/title"),
        Attribute("description","self::photoset/description"),
        Attribute("count","self::photoset","photos"),
    ]
    __display__ = ["id","title"]

    @caller("photosets.getPhotos",self_name = "photoset_id")
    def photos(self):
        """ method: flickr.photosets.getPhotos """
        return {},_extract_list("rsp/photoset/photo",Photo)

class Group(FleakrObject):
    __attributes__ = [
        Attribute("id","self::group","nsid"),
        Attribute("id","rsp/group","id"),
        Attribute("name","self::group","name"),
        Attribute("name","rsp/group/name"),
        Attribute("adult_flag","self::group","eighteenplus"),
        Attribute("description","rsp/group/description"),
        Attribute("members","rsp/group/members"),
        Attribute("privacy","rsp/group/privacy"),
    ]
    __lazy__ = [
        ("load_info",["description","members","privacy"]),
    ]
    __display__ = ["id","name"]

    @caller("groups.getInfo",self_name = "group_id")
    def load_info(self):
        """ method: flickr.groups.getInfo """
        return {},self.populate_from

    @property
    def is_adult(self):
        return to_bool(self.adult_flag)

    @caller("groups.pools.getPhotos",self_name = "group_id")
    def photos(self):
        """ method: flickr.groups.pools.getPhotos """
        return {},_extract_list("rsp/photos/photo",Photo)

class Image(FleakrObject):
    __attributes__ = [
        Attribute("size","self::size","label"),
        Attribute("width","self::size","width"),
        Attribute("height","self::size","height"),
        Attribute("url","self::size","source"),
        Attribute("page","self::size","url"),
    ]
    __display__ = ["size","url"]

    @property
    def filename(self):
        return os.path.basename(self.url)

    def save_to(self,target):
        """
            Downloads the image into 'target', a file name or a
            directory (the image file name is kept). Returns the path
            of the written file.
        """
        if os.path.isdir(target):
            target = os.path.join(target,self.filename)
        log.debug("saving %s to %s",self.url,target)
        try :
            r = requests.get(self.url,timeout = method_call.TIMEOUT)
            r.raise_for_status()
        except requests.RequestException as e :
            raise RemoteError("Download of %s failed: %s"%(self.url,e)) from e
        with open(target,"wb") as f:
            f.write(r.content)
        return target

class Search(object):
    """
        A photo search on text and/or tags, optionally restricted
        to one user.

        >>> Search(tags = ["cats","dogs"]).results()
    """
    def __init__(self,text = None,tags = None,user_id = None):
        if isinstance(tags,str):
            tags = [tags]
        if not text and not tags :
            raise ValueError("A search needs a text or some tags")
        self.text = text
        self.tags = tags or []
        self.user_id = user_id

    def parameters(self):
        params = {}
        if self.text : params["text"] = self.text
        if self.tags : params["tags"] = ",".join(self.tags)
        if self.user_id is not None : params["user_id"] = self.user_id
        return params

    @caller("photos.search")
    def results(self):
        """ method: flickr.photos.search """
        return self.parameters(),_extract_list("rsp/photos/photo",Photo)

def _extract_list(path,cls):
    def format_result(r):
        return [ cls(node) for node in r.xpath("/" + path) ]
    return format_result
