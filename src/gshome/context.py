'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import logging
from typing import Dict, List, Optional

from gshome import settings
from gshome.facade import CatalogFacade, NO_WORKSPACE, ANY_WORKSPACE, PUBLISHED
from gshome.filters import published_filter
from gshome.layer import PublishedInfo
from gshome.support import is_blank, split_prefixed_name
from gshome.workspace import Workspace

logger = logging.getLogger("gshome.context")


class RequestContext(object):
    '''
        Workspace and layer the home page is showing services for.
        Both None means global services; a published resource and its
        workspace never disagree once resolved.
    '''

    def __init__(self, workspace_param: str = None, layer_param: str = None):
        # raw request parameters
        self.workspace_param = workspace_param
        self.layer_param = layer_param
        self.workspace: Optional[Workspace] = None
        self.published: Optional[PublishedInfo] = None

    @property
    def workspace_name(self):
        return self.workspace.name if self.workspace is not None else None

    @property
    def layer_name(self):
        return self.published.name if self.published is not None else None

    @property
    def is_global(self) -> bool:
        return self.workspace is None and self.published is None

    def parameters(self) -> Dict[str, Optional[str]]:
        '''
            request parameters reproducing this context
        '''
        return {"workspace": self.workspace_name, "layer": self.layer_name}

    def __eq__(self, other):
        return (isinstance(other, RequestContext)
                and self.workspace == other.workspace
                and self.published == other.published)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        return "RequestContext(workspace=%s, published=%s)" % (
            self.workspace_name, self.published.prefixed_name if self.published is not None else None)


class ContextResolver(object):
    '''
        Turns the workspace and layer request parameters into a RequestContext.
        Unknown names leave the context unset, catalog failures propagate.
    '''

    def __init__(self, catalog: CatalogFacade):
        self.catalog = catalog

    def resolve(self, workspace_param: str = None, layer_param: str = None) -> RequestContext:
        context = RequestContext(workspace_param, layer_param)

        workspace_name = None if is_blank(workspace_param) else workspace_param
        layer_name = None if is_blank(layer_param) else layer_param

        if layer_name is not None:
            prefix, simple = split_prefixed_name(layer_name)
            if prefix is not None:
                # the prefix of a layer wins over the workspace parameter
                if workspace_name is not None and workspace_name != prefix:
                    logger.debug("Layer %s overrides workspace parameter %s", layer_name, workspace_name)
                workspace_name = None if is_blank(prefix) else prefix
                layer_name = None if is_blank(simple) else simple

        if workspace_name is not None:
            context.workspace = self.catalog.get_workspace_by_name(workspace_name)
            if context.workspace is None:
                logger.debug("No workspace named %s, showing global services", workspace_name)

        if layer_name is not None:
            context.published = self.published_info(context.workspace, layer_name)
            if context.published is None:
                logger.debug("No layer or layer group named %s in %s", layer_name,
                             context.workspace_name or "global context")

        if context.published is not None:
            prefix, _ = split_prefixed_name(context.published.prefixed_name)
            if prefix is not None and (context.workspace is None or context.workspace.name != prefix):
                context.workspace = context.published.workspace
        return context

    def published_info(self, workspace: Optional[Workspace], layer_name: str) -> Optional[PublishedInfo]:
        '''
            Layer, or else layer group, named layer_name.
            With a workspace the lookup stays inside it; without one a global
            layer is tried first, then a global group, then a group of any workspace.
        '''
        if layer_name is None:
            return None
        catalog = self.catalog
        if workspace is not None:
            namespace = catalog.get_namespace_by_prefix(workspace.name)
            if namespace is not None:
                layer = catalog.get_layer_by_name(namespace.qualify(layer_name))
                if layer is not None:
                    return layer
            return catalog.get_layer_group_by_name(workspace, layer_name)

        layer = catalog.get_layer_by_name(layer_name)
        if layer is not None:
            return layer
        group = catalog.get_layer_group_by_name(NO_WORKSPACE, layer_name)
        if group is not None:
            return group
        return catalog.get_layer_group_by_name(ANY_WORKSPACE, layer_name)


def to_workspace(workspace_name: Optional[str], layer_name: Optional[str],
                 keep_workspace: bool = False) -> Optional[str]:
    '''
        Workspace parameter for a selected layer.
        A bare layer name carries no workspace: None is returned unless keep_workspace.
    '''
    if not is_blank(layer_name):
        prefix, _ = split_prefixed_name(layer_name)
        if prefix is not None:
            return prefix
        return workspace_name if keep_workspace else None
    return workspace_name


def to_layer(workspace_name: Optional[str], layer_name: Optional[str]) -> Optional[str]:
    '''
        Layer parameter for a selected layer, without its prefix
    '''
    if is_blank(layer_name):
        return None
    _, simple = split_prefixed_name(layer_name)
    return simple


def workspace_changed(workspace_name: Optional[str]) -> Dict[str, Optional[str]]:
    '''
        a new workspace clears the layer selection
    '''
    return {"workspace": None if is_blank(workspace_name) else workspace_name, "layer": None}


def layer_changed(workspace_name: Optional[str], layer_name: Optional[str],
                  keep_workspace: bool = None) -> Dict[str, Optional[str]]:
    if keep_workspace is None:
        keep_workspace = settings.BARE_LAYER_KEEPS_WORKSPACE
    return {
        "workspace": to_workspace(workspace_name, layer_name, keep_workspace),
        "layer": to_layer(workspace_name, layer_name)
    }


def published_choices(catalog: CatalogFacade, context: RequestContext,
                      include_containers: bool = None) -> List[PublishedInfo]:
    '''
        Visible layers and layer groups of the context workspace, sorted by prefixed name
    '''
    seen = set()
    published = []
    with catalog.list(PUBLISHED, published_filter(context.workspace_name, include_containers)) as it:
        for info in it:
            if info in seen:
                continue
            seen.add(info)
            published.append(info)
    published.sort(key=lambda p: p.prefixed_name)
    return published


def count_published(catalog: CatalogFacade, context: RequestContext, include_containers: bool = None) -> int:
    return catalog.count(PUBLISHED, published_filter(context.workspace_name, include_containers))
