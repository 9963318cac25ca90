'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

from gshome import settings
from gshome.layer import LAYER, LAYERGROUP, LayerGroupMode

_MISSING = object()


def property_value(obj, path: str):
    '''
        Walk a dotted attribute path, 'resource.namespace.prefix'.
        Returns _MISSING as soon as a link of the path is absent.
    '''
    value = obj
    for attr in path.split('.'):
        if value is None:
            return _MISSING
        value = getattr(value, attr, _MISSING)
        if value is _MISSING:
            return _MISSING
    return value


class Predicate(object):
    '''
        Catalog filter. Predicates are plain data so a catalog backend may
        translate them into its own query language, evaluate() is the reference
        semantics.
    '''

    def evaluate(self, obj) -> bool:
        raise NotImplementedError

    def __call__(self, obj) -> bool:
        return self.evaluate(obj)

    def __and__(self, other):
        return And(self, other)

    def __or__(self, other):
        return Or(self, other)

    def __invert__(self):
        return Not(self)


class AcceptAll(Predicate):

    def evaluate(self, obj):
        return True

    def __repr__(self):
        return "INCLUDE"


class Equal(Predicate):

    def __init__(self, path: str, value):
        self.path = path
        self.value = value

    def evaluate(self, obj):
        found = property_value(obj, self.path)
        return found is not _MISSING and found == self.value

    def __repr__(self):
        return "[%s = %r]" % (self.path, self.value)


class IsInstanceOf(Predicate):
    '''
        Matches on the resource_type tag
    '''

    def __init__(self, resource_type: str):
        self.resource_type = resource_type

    def evaluate(self, obj):
        return getattr(obj, "resource_type", None) == self.resource_type

    def __repr__(self):
        return "[instanceof %s]" % self.resource_type


class And(Predicate):

    def __init__(self, *children):
        self.children = children

    def evaluate(self, obj):
        return all(child.evaluate(obj) for child in self.children)

    def __repr__(self):
        return "(%s)" % " AND ".join(repr(c) for c in self.children)


class Or(Predicate):

    def __init__(self, *children):
        self.children = children

    def evaluate(self, obj):
        return any(child.evaluate(obj) for child in self.children)

    def __repr__(self):
        return "(%s)" % " OR ".join(repr(c) for c in self.children)


class Not(Predicate):

    def __init__(self, child: Predicate):
        self.child = child

    def evaluate(self, obj):
        return not self.child.evaluate(obj)

    def __repr__(self):
        return "NOT %r" % (self.child,)


def accept_all():
    return AcceptAll()


def equal(path, value):
    return Equal(path, value)


def is_instance_of(resource_type):
    return IsInstanceOf(resource_type)


def and_(*children):
    return And(*children)


def or_(*children):
    return Or(*children)


def not_(child):
    return Not(child)


def published_filter(workspace_name: str = None, include_containers: bool = None) -> Predicate:
    '''
        Layers and layer groups a visitor can interact with: enabled, advertised,
        layers also need an enabled store. workspace_name limits the search to one
        workspace. include_containers None falls back to settings.INCLUDE_CONTAINER_GROUPS.
    '''
    if include_containers is None:
        include_containers = settings.INCLUDE_CONTAINER_GROUPS

    layer_filter = [
        is_instance_of(LAYER),
        equal("resource.enabled", True),
        equal("resource.store.enabled", True),
        equal("resource.advertised", True)
    ]
    if workspace_name is not None:
        layer_filter.append(equal("resource.namespace.prefix", workspace_name))

    group_filter = [
        is_instance_of(LAYERGROUP),
        equal("enabled", True),
        equal("advertised", True)
    ]
    if not include_containers:
        group_filter.append(or_(*[equal("mode", mode) for mode in LayerGroupMode.NON_CONTAINER]))
    if workspace_name is not None:
        group_filter.append(equal("workspace.name", workspace_name))

    return or_(and_(*layer_filter), and_(*group_filter))


def layer_scope_filter(workspace_name: str = None) -> Predicate:
    if workspace_name is None:
        return accept_all()
    return equal("resource.namespace.prefix", workspace_name)


def group_scope_filter(workspace_name: str = None) -> Predicate:
    if workspace_name is None:
        return accept_all()
    return equal("workspace.name", workspace_name)


def store_scope_filter(workspace_name: str = None) -> Predicate:
    if workspace_name is None:
        return accept_all()
    return equal("workspace.name", workspace_name)
