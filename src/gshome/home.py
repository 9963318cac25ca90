'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import logging
import time
from typing import List

from gshome import settings
from gshome.capabilities import CapabilitiesHomePageLinkProvider
from gshome.context import ContextResolver, RequestContext, published_choices, count_published
from gshome.facade import CatalogFacade, WORKSPACE, STORE, LAYER, LAYERGROUP
from gshome.filters import layer_scope_filter, group_scope_filter, store_scope_filter, accept_all
from gshome.layer import LayerGroupMode
from gshome.service import ServiceAggregator, ServiceDescriptionProvider, ServiceOrder

logger = logging.getLogger("gshome.home")

MESSAGE_PREFIX = "GeoServerHomePage."


class CatalogSummary(object):
    '''
        Catalog counts shown to administrators
    '''

    def __init__(self, layers: int, groups: int, stores: int, workspaces: int):
        self.layers = layers
        self.groups = groups
        self.stores = stores
        self.workspaces = workspaces

    def __repr__(self):
        return "CatalogSummary(layers=%d, groups=%d, stores=%d, workspaces=%d)" % (
            self.layers, self.groups, self.stores, self.workspaces)


def catalog_summary(catalog: CatalogFacade, workspace_name: str = None) -> CatalogSummary:
    started = time.monotonic()
    try:
        return CatalogSummary(
            catalog.count(LAYER, layer_scope_filter(workspace_name)),
            catalog.count(LAYERGROUP, group_scope_filter(workspace_name)),
            catalog.count(STORE, store_scope_filter(workspace_name)),
            1 if workspace_name is not None else catalog.count(WORKSPACE, accept_all())
        )
    finally:
        logger.debug("Admin summary of catalog links took %d ms", (time.monotonic() - started) * 1000)


def description_keys(context: RequestContext, global_services: bool = None) -> List[str]:
    '''
        Message keys of the page description, most specific context first,
        followed by the global services notice.
    '''
    if global_services is None:
        global_services = settings.GLOBAL_SERVICES

    published = context.published
    if published is not None and published.is_layer:
        key = "descriptionLayer"
    elif published is not None and published.is_layergroup:
        if published.mode in (LayerGroupMode.OPAQUE_CONTAINER, LayerGroupMode.SINGLE):
            key = "descriptionLayer"
        else:
            key = "descriptionLayerGroup"
    elif context.workspace is not None:
        key = "descriptionWorkspace"
    elif global_services:
        key = "descriptionGlobal"
    else:
        key = "descriptionGlobalOff"

    notice = "globalOn" if global_services else "globalOff"
    return [MESSAGE_PREFIX + key, MESSAGE_PREFIX + notice]


class HomePageModel(object):
    '''
        Everything the presentation layer renders for one request
    '''

    def __init__(self, context: RequestContext, admin: bool = False):
        self.context = context
        self.admin = admin
        self.services = []
        self.links = []
        self.capabilities = []
        self.layer_choices = []
        self.workspace_choices = []
        self.layer_count = 0
        self.summary = None
        self.description_keys = []

    @property
    def parameters(self):
        return self.context.parameters()

    @property
    def show_services(self) -> bool:
        return bool(self.services or self.links)


class HomePage(object):
    '''
        Resolves the request context and gathers services, capabilities links
        and, for administrators, a catalog summary.
    '''

    def __init__(self, catalog: CatalogFacade, extensions, admin: bool = False, global_services: bool = None,
                 order: ServiceOrder = None, include_containers: bool = None):
        self.catalog = catalog
        self.extensions = extensions
        self.admin = admin
        self.global_services = global_services if global_services is not None else settings.GLOBAL_SERVICES
        self.order = order
        self.include_containers = include_containers
        self.resolver = ContextResolver(catalog)

    def build(self, workspace: str = None, layer: str = None) -> HomePageModel:
        context = self.resolver.resolve(workspace, layer)
        model = HomePageModel(context, self.admin)

        providers = self.extensions.extensions(ServiceDescriptionProvider)
        services, links = ServiceAggregator(providers, self.order).aggregate(context)
        if not self.admin:
            hidden = set(s.service for s in services if s.admin)
            services = [s for s in services if s.service not in hidden]
            links = [link for link in links if link.service not in hidden]
        model.services, model.links = services, links

        for provider in self.extensions.extensions(CapabilitiesHomePageLinkProvider):
            # description providers already listed their links with the services
            if isinstance(provider, ServiceDescriptionProvider):
                continue
            model.capabilities.extend(provider.get_capabilities_links())

        model.layer_choices = published_choices(self.catalog, context, self.include_containers)
        model.layer_count = count_published(self.catalog, context, self.include_containers)
        with self.catalog.list(WORKSPACE, accept_all()) as it:
            model.workspace_choices = sorted(ws.name for ws in it)

        if self.admin:
            model.summary = catalog_summary(self.catalog, context.workspace_name)
        model.description_keys = description_keys(context, self.global_services)
        return model
