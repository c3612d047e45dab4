"""
    Some base objects for the fleakr package: the exception hierarchy
    and the value coercions shared by the Flickr objects.
"""
import re

class FleakrError(Exception):
    pass

class RemoteError(FleakrError):
    """
        The remote call could not complete.
    """
    pass

class ApiError(RemoteError):
    def __init__(self,code,message):
        RemoteError.__init__(self,"%i : %s"%(code,message))
        self.code = code
        self.message = message

INT_REG = re.compile(r'^\s*([+-]?[0-9]+)',re.ASCII)

def to_int(value):
    """
        Lenient integer coercion: reads the leading digits of a string
        and returns 0 for None or non-numeric text.

        >>> to_int("12abc"), to_int("abc"), to_int(None)
        (12, 0, 0)
    """
    if value is None :
        return 0
    if isinstance(value,int):
        return value
    m = INT_REG.match(str(value))
    if m is None :
        return 0
    return int(m.group(1))

def to_bool(value):
    return to_int(value) != 0
