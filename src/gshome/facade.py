'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import abc

from gshome.filters import Predicate, accept_all
from gshome.layer import LAYER, LAYERGROUP

WORKSPACE = "workspace"
STORE = "store"
# layers followed by layer groups
PUBLISHED = "published"

KINDS = (WORKSPACE, STORE, LAYER, LAYERGROUP, PUBLISHED)


class _Scope(object):

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name


# layer group lookup scopes besides a concrete Workspace
NO_WORKSPACE = _Scope("NO_WORKSPACE")
ANY_WORKSPACE = _Scope("ANY_WORKSPACE")


class CloseableIterator(object):
    '''
        Iterator over catalog objects that must be closed once consumed,

            with catalog.list(PUBLISHED, predicate) as it:
                for published in it:
                    ...
    '''

    def __init__(self, iterable, on_close=None):
        self._iterator = iter(iterable)
        self._on_close = on_close
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        if self.closed:
            raise StopIteration
        return next(self._iterator)

    def close(self):
        if self.closed:
            return
        self.closed = True
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()
        if self._on_close is not None:
            self._on_close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False


class CatalogFacade(metaclass=abc.ABCMeta):
    '''
        Read only view of the catalog the home page works against.
        Lookups return None when nothing matches, backend failures raise.
    '''

    @abc.abstractmethod
    def get_workspace_by_name(self, name):
        pass

    @abc.abstractmethod
    def get_namespace_by_prefix(self, prefix):
        pass

    @abc.abstractmethod
    def get_layer_by_name(self, name):
        '''
            name: bare 'roads' or qualified 'geo:roads'
        '''
        pass

    @abc.abstractmethod
    def get_layer_group_by_name(self, scope, name):
        '''
            scope: a Workspace, NO_WORKSPACE or ANY_WORKSPACE
        '''
        pass

    @abc.abstractmethod
    def list(self, kind: str, predicate: Predicate = None) -> CloseableIterator:
        pass

    def count(self, kind: str, predicate: Predicate = None) -> int:
        with self.list(kind, predicate) as it:
            return sum(1 for _ in it)


def check_kind(kind):
    if kind not in KINDS:
        raise ValueError("Unknown catalog kind %s, expected one of %s" % (kind, ", ".join(KINDS)))


def matching(objects, predicate):
    if predicate is None:
        predicate = accept_all()
    return (obj for obj in objects if predicate.evaluate(obj))
