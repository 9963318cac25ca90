'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import logging

from gshome.common import AmbiguousRequestError
from gshome.facade import (CatalogFacade, CloseableIterator, NO_WORKSPACE, ANY_WORKSPACE,
                           WORKSPACE, STORE, LAYER, LAYERGROUP, check_kind, matching)
from gshome.layer import Layer, LayerGroup, Resource, LayerGroupMode
from gshome.store import Store, DATA_STORE
from gshome.support import split_prefixed_name
from gshome.workspace import Workspace, Namespace

logger = logging.getLogger("gshome.memory")


class MemoryCatalog(CatalogFacade):
    '''
        Catalog held in process, for embedding and for tests.
        The first workspace added is the default one.
    '''

    def __init__(self):
        self._workspaces = []
        self._namespaces = []
        self._stores = []
        self._layers = []
        self._layergroups = []
        self.default_workspace = None

    def add_workspace(self, name: str, uri: str = None, isolated: bool = False) -> Workspace:
        '''
            adds the workspace together with its namespace
        '''
        if self.get_workspace_by_name(name) is not None:
            raise ValueError("Workspace %s already exists" % name)
        workspace = Workspace(name, isolated)
        self._workspaces.append(workspace)
        self._namespaces.append(Namespace(name, uri or "http://%s" % name))
        if self.default_workspace is None:
            self.default_workspace = workspace
        return workspace

    def add_store(self, name: str, workspace, enabled: bool = True, type: str = DATA_STORE) -> Store:
        workspace = self._workspace(workspace)
        store = Store(name, workspace, enabled, type)
        self._stores.append(store)
        return store

    def add_layer(self, name: str, store: Store, enabled: bool = True, advertised: bool = True,
                  title: str = None) -> Layer:
        namespace = self.get_namespace_by_prefix(store.workspace.name)
        if self._find_layer(namespace.qualify(name)) is not None:
            raise ValueError("Layer %s already exists" % namespace.qualify(name))
        layer = Layer(Resource(name, namespace, store, enabled, advertised, title))
        self._layers.append(layer)
        return layer

    def add_layergroup(self, name: str, workspace=None, mode: str = LayerGroupMode.SINGLE,
                       enabled: bool = True, advertised: bool = True, title: str = None) -> LayerGroup:
        if workspace is not None:
            workspace = self._workspace(workspace)
        group = LayerGroup(name, workspace, mode, enabled, advertised, title)
        self._layergroups.append(group)
        return group

    def _workspace(self, workspace) -> Workspace:
        if isinstance(workspace, Workspace):
            return workspace
        found = self.get_workspace_by_name(workspace)
        if found is None:
            raise ValueError("No workspace named %s" % workspace)
        return found

    def get_workspace_by_name(self, name):
        for workspace in self._workspaces:
            if workspace.name == name:
                return workspace
        return None

    def get_namespace_by_prefix(self, prefix):
        for namespace in self._namespaces:
            if namespace.prefix == prefix:
                return namespace
        return None

    def _find_layer(self, prefixed_name):
        for layer in self._layers:
            if layer.prefixed_name == prefixed_name:
                return layer
        return None

    def get_layer_by_name(self, name):
        prefix, simple = split_prefixed_name(name)
        if prefix is not None:
            return self._find_layer(name)
        # bare name, default namespace first
        if self.default_workspace is not None:
            layer = self._find_layer("%s:%s" % (self.default_workspace.name, simple))
            if layer is not None:
                return layer
        for layer in self._layers:
            if layer.name == simple:
                return layer
        logger.debug("No layer named %s", name)
        return None

    def get_layer_group_by_name(self, scope, name):
        if scope is NO_WORKSPACE:
            groups = [g for g in self._layergroups if g.workspace is None and g.name == name]
        elif scope is ANY_WORKSPACE:
            groups = [g for g in self._layergroups if g.name == name]
            # several workspaces may reuse the name, first one wins
            return groups[0] if groups else None
        elif isinstance(scope, Workspace):
            groups = [g for g in self._layergroups if g.workspace == scope and g.name == name]
        else:
            raise ValueError("Can't interpret %s as a layer group scope" % (scope,))
        if len(groups) > 1:
            raise AmbiguousRequestError("Multiple layer groups named %s in %s" % (name, scope))
        return groups[0] if groups else None

    def _objects(self, kind):
        if kind == WORKSPACE:
            return list(self._workspaces)
        if kind == STORE:
            return list(self._stores)
        if kind == LAYER:
            return list(self._layers)
        if kind == LAYERGROUP:
            return list(self._layergroups)
        return list(self._layers) + list(self._layergroups)

    def list(self, kind, predicate=None):
        check_kind(kind)
        return CloseableIterator(matching(self._objects(kind), predicate))

