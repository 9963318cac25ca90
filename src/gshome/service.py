'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import abc
import copy
import logging
import threading
from typing import List, Sequence, Tuple

from gshome import settings
from gshome.context import RequestContext
from gshome.layer import PublishedInfo
from gshome.workspace import Workspace

logger = logging.getLogger("gshome.service")


class ServiceLinkDescription(object):
    '''
        Link to a service description document, GetCapabilities for OGC services
    '''

    def __init__(self, service: str, version: str, link: str, workspace: str = None, layer: str = None,
                 protocol: str = None):
        self.service = service.lower()
        self.version = str(version) if version is not None else None
        self.link = link
        self.workspace = workspace
        self.layer = layer
        self.protocol = protocol if protocol is not None else service.upper()

    def _key(self):
        return (self.service, self.version, self.link, self.workspace, self.layer, self.protocol)

    def __eq__(self, other):
        return isinstance(other, ServiceLinkDescription) and self._key() == other._key()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "ServiceLinkDescription{service='%s', version='%s', link='%s'}" % (
            self.service, self.version, self.link)


class ServiceDescription(object):
    '''
        One web service as listed on the home page.

        Identity is (workspace, layer, service): two descriptions with the same
        triple are the same service whatever their titles say.
    '''

    def __init__(self, service: str, title: str = None, description: str = None, available: bool = True,
                 admin: bool = False, workspace: str = None, layer: str = None):
        '''
            service: service identifier, wms, wfs, ogcapi-features ...; stored lower case
            workspace: workspace prefix, None for a global service
            layer: layer or layer group name, None for workspace or global services
            available: False when disabled or the user lacks permission
            admin: the service needs the admin role, REST for instance
        '''
        self.service = service.lower()
        self.title = title if title is not None else service.upper()
        self.description = description if description is not None else ""
        self.available = available
        self.admin = admin
        self.workspace = workspace
        self.layer = layer
        self.links: List[ServiceLinkDescription] = []

    @property
    def key(self) -> Tuple:
        return (self.workspace, self.layer, self.service)

    def add_link(self, link: ServiceLinkDescription):
        if link not in self.links:
            self.links.append(link)

    def __eq__(self, other):
        return isinstance(other, ServiceDescription) and self.key == other.key

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return "ServiceDescription{service='%s', available=%s, workspace='%s', layer='%s', links=%d}" % (
            self.service, self.available, self.workspace, self.layer, len(self.links))


class ServiceOrder(object):
    '''
        Display order of services: the configured names first, then every other
        name in the order it is first seen. Names are only ever appended and the
        list is shared between requests, appends are made under a lock.
    '''

    def __init__(self, names: Sequence[str] = None):
        if names is None:
            names = settings.SERVICE_ORDER
        self._names = []
        for name in names:
            if name.lower() not in self._names:
                self._names.append(name.lower())
        self._lock = threading.Lock()

    @property
    def names(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._names)

    def index(self, service: str) -> int:
        service = service.lower()
        with self._lock:
            if service not in self._names:
                logger.debug("Service %s appended to the service order", service)
                self._names.append(service)
            return self._names.index(service)

    def sort(self, descriptions):
        '''
            stable, keys are taken in list order so unknown names keep first-seen order
        '''
        return sorted(descriptions, key=lambda d: self.index(d.service))


# process wide order, grows as unknown services show up
SERVICE_ORDER = ServiceOrder()


class ServiceDescriptionProvider(metaclass=abc.ABCMeta):
    '''
        Extension point describing web services, and their links, for a
        workspace and layer context (both None for global services).
    '''

    @abc.abstractmethod
    def get_services(self, workspace: Workspace, published: PublishedInfo) -> List[ServiceDescription]:
        pass

    @abc.abstractmethod
    def get_service_links(self, workspace: Workspace, published: PublishedInfo) -> List[ServiceLinkDescription]:
        pass


class OwsServiceDescriptionProvider(ServiceDescriptionProvider):
    '''
        Describes an OGC service reachable through the ows dispatcher, with one
        GetCapabilities link per version. Virtual services are addressed as
        ../ws/ows and ../ws/layer/ows.
    '''

    def __init__(self, service: str, versions: Sequence[str], title: str = None, description: str = None,
                 workspace_capable: bool = True, layer_capable: bool = True, available: bool = True,
                 admin: bool = False, ows_path: str = None):
        self.service = service.lower()
        self.versions = list(versions)
        self.title = title
        self.description = description
        self.workspace_capable = workspace_capable
        self.layer_capable = layer_capable
        self.available = available
        self.admin = admin
        self.ows_path = ows_path if ows_path is not None else settings.OWS_PATH

    def _supports(self, workspace, published):
        if published is not None:
            return self.layer_capable
        if workspace is not None:
            return self.workspace_capable
        return True

    def _names(self, workspace, published):
        workspace_name = workspace.name if workspace is not None else None
        if published is not None:
            if workspace_name is None and published.workspace is not None:
                workspace_name = published.workspace.name
            return workspace_name, published.name
        return workspace_name, None

    def capabilities_href(self, version, workspace_name=None, layer_name=None):
        base, _, endpoint = self.ows_path.rstrip('/').rpartition('/')
        path = [base] if base else []
        if workspace_name is not None:
            path.append(workspace_name)
        if layer_name is not None:
            path.append(layer_name)
        path.append(endpoint)
        return "%s?service=%s&version=%s&request=GetCapabilities" % (
            '/'.join(path), self.service.upper(), version)

    def get_services(self, workspace, published):
        if not self._supports(workspace, published):
            return []
        workspace_name, layer_name = self._names(workspace, published)
        return [ServiceDescription(self.service, self.title, self.description, self.available, self.admin,
                                   workspace_name, layer_name)]

    def get_service_links(self, workspace, published):
        if not self._supports(workspace, published):
            return []
        workspace_name, layer_name = self._names(workspace, published)
        return [ServiceLinkDescription(self.service, version,
                                       self.capabilities_href(version, workspace_name, layer_name),
                                       workspace_name, layer_name)
                for version in self.versions]


class ServiceAggregator(object):
    '''
        Merges what every ServiceDescriptionProvider has to say about a context.
    '''

    def __init__(self, providers: Sequence[ServiceDescriptionProvider], order: ServiceOrder = None):
        self.providers = list(providers)
        self.order = order if order is not None else SERVICE_ORDER

    def aggregate(self, context: RequestContext) -> Tuple[List[ServiceDescription], List[ServiceLinkDescription]]:
        '''
            Descriptions deduplicated on their identity, first one seen wins, and
            sorted by service order; links deduplicated in first-seen order and
            attached to the descriptions of their service.
        '''
        descriptions = {}
        links = []
        for provider in self.providers:
            for description in provider.get_services(context.workspace, context.published):
                if description.key in descriptions:
                    logger.debug("Duplicate %s from %s ignored", description, type(provider).__name__)
                    continue
                # provider objects stay untouched
                duplicate = copy.copy(description)
                duplicate.links = list(description.links)
                descriptions[description.key] = duplicate
            for link in provider.get_service_links(context.workspace, context.published):
                if link not in links:
                    links.append(link)

        ordered = self.order.sort(descriptions.values())
        for description in ordered:
            for link in links:
                if link.service == description.service:
                    description.add_link(link)
        return ordered, links
