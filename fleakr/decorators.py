from functools import wraps

from . import method_call

def caller(flickr_method,self_name = None):
    """
        This decorator binds a method to the flickr method given
        by 'flickr_method'.
        The wrapped method should return the argument dictionnary
        and a function that formats the response document.

        When 'self_name' is given, the id of the calling object is
        sent under that argument name (e.g. 'user_id').
    """
    def decorator(method) :
        @wraps(method)
        def call(*args,**kwargs):
            method_args,format_result = method(*args,**kwargs)
            if self_name :
                method_args[self_name] = args[0].id
            r = method_call.call_api(flickr_method,**method_args)
            return format_result(r)
        call.flickr_method = flickr_method
        return call
    return decorator
