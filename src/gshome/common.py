'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"


class GeoServerError(Exception):
    '''
        Parent exception of everything gshome raises
    '''
    pass


class FailedRequestError(GeoServerError):

    def __init__(self, message, status_code=None):
        super(FailedRequestError, self).__init__(message)
        self.status_code = status_code


class CatalogUnavailableError(FailedRequestError):
    '''
        The catalog backend could not be reached or answered with a server error.
        Never retried here, the caller decides what the user sees.
    '''
    pass


class AmbiguousRequestError(GeoServerError):
    pass


class ExtensionError(GeoServerError):
    pass
