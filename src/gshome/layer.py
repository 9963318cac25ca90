'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

from xml.etree.ElementTree import Element

from gshome.store import Store
from gshome.support import xml_text, xml_bool, split_prefixed_name
from gshome.workspace import Workspace, Namespace

LAYER = "layer"
LAYERGROUP = "layerGroup"


class LayerGroupMode(object):
    '''
        Layer group modes as spelled by the REST API.
        CONTAINER is the only mode that is a plain, non opaque, grouping of layers.
    '''
    SINGLE = "SINGLE"
    OPAQUE_CONTAINER = "OPAQUE_CONTAINER"
    NAMED = "NAMED"
    CONTAINER = "CONTAINER"
    EO = "EO"

    ALL = (SINGLE, OPAQUE_CONTAINER, NAMED, CONTAINER, EO)
    NON_CONTAINER = (EO, NAMED, OPAQUE_CONTAINER, SINGLE)


class Resource(object):
    '''
        The feature type or coverage a layer publishes
    '''

    def __init__(self, name: str, namespace: Namespace, store: Store, enabled: bool = True,
                 advertised: bool = True, title: str = None):
        self.name = name
        self.namespace = namespace
        self.store = store
        self.enabled = enabled
        self.advertised = advertised
        self.title = title


class PublishedInfo(object):
    '''
        Layer or layer group. Subclasses set the resource_type tag, callers
        dispatch on the tag instead of checking the class.
    '''
    resource_type = None

    @property
    def workspace(self) -> Workspace:
        raise NotImplementedError

    @property
    def prefixed_name(self) -> str:
        '''
            'workspace:name', or the bare name for a global layer group
        '''
        prefix = self._prefix()
        if prefix is None:
            return self.name
        return "%s:%s" % (prefix, self.name)

    def _prefix(self):
        workspace = self.workspace
        return workspace.name if workspace is not None else None

    @property
    def is_layer(self) -> bool:
        return self.resource_type == LAYER

    @property
    def is_layergroup(self) -> bool:
        return self.resource_type == LAYERGROUP

    def __eq__(self, other):
        return (isinstance(other, PublishedInfo)
                and self.resource_type == other.resource_type
                and self.prefixed_name == other.prefixed_name)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.resource_type, self.prefixed_name))

    def __repr__(self):
        return "%s(%s)" % (self.resource_type, self.prefixed_name)


class Layer(PublishedInfo):
    resource_type = LAYER

    def __init__(self, resource: Resource, type: str = "VECTOR"):
        self.resource = resource
        self.type = type

    @property
    def name(self):
        return self.resource.name

    @property
    def enabled(self):
        return self.resource.enabled

    @property
    def advertised(self):
        return self.resource.advertised

    @property
    def store(self) -> Store:
        return self.resource.store

    @property
    def namespace(self) -> Namespace:
        return self.resource.namespace

    @property
    def workspace(self) -> Workspace:
        return self.resource.store.workspace

    def _prefix(self):
        # layers are addressed through their namespace
        if self.namespace is not None:
            return self.namespace.prefix
        return super(Layer, self)._prefix()


class LayerGroup(PublishedInfo):
    resource_type = LAYERGROUP

    def __init__(self, name: str, workspace: Workspace = None, mode: str = LayerGroupMode.SINGLE,
                 enabled: bool = True, advertised: bool = True, title: str = None):
        '''
            workspace: None for a global group
        '''
        if mode not in LayerGroupMode.ALL:
            raise ValueError("Unknown layer group mode %s" % mode)
        self.name = name
        self._workspace = workspace
        self.mode = mode
        self.enabled = enabled
        self.advertised = advertised
        self.title = title

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def is_container(self) -> bool:
        return self.mode == LayerGroupMode.CONTAINER


def resource_from_dom(node: Element, namespace: Namespace, store: Store) -> Resource:
    '''
        node: <featureType> or <coverage>
            <name>roads</name><title>Roads</title><enabled>true</enabled><advertised>true</advertised>
    '''
    _, name = split_prefixed_name(xml_text(node, "name"))
    return Resource(
        name,
        namespace,
        store,
        enabled=xml_bool(node, "enabled", default=True),
        advertised=xml_bool(node, "advertised", default=True),
        title=xml_text(node, "title")
    )


def layergroup_from_dom(node: Element) -> LayerGroup:
    '''
        node: <layerGroup><name>base</name><mode>SINGLE</mode><workspace><name>geo</name></workspace>...
        older servers leave out enabled and advertised, both default to true
    '''
    ws_name = xml_text(node, "workspace/name")
    _, name = split_prefixed_name(xml_text(node, "name"))
    return LayerGroup(
        name,
        Workspace(ws_name) if ws_name else None,
        mode=xml_text(node, "mode", LayerGroupMode.SINGLE),
        enabled=xml_bool(node, "enabled", default=True),
        advertised=xml_bool(node, "advertised", default=True),
        title=xml_text(node, "title")
    )
