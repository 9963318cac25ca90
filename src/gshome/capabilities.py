'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import abc
import logging
from typing import List, Sequence

from gshome import settings
from gshome.service import ServiceDescriptionProvider

logger = logging.getLogger("gshome.capabilities")

GET_CAPABILITIES = "GetCapabilities"


class Service(object):
    '''
        A service registered with the platform: wms 1.3.0, wfs 2.0.0 ...
    '''

    def __init__(self, id: str, version: str, operations: Sequence[str] = (), custom_capabilities_link: str = None):
        self.id = id
        self.version = str(version)
        self.operations = list(operations)
        self.custom_capabilities_link = custom_capabilities_link

    def __repr__(self):
        return "Service(%s %s)" % (self.id, self.version)


class CapsInfo(object):

    def __init__(self, service: str, version: str, caps_link: str):
        self.service = service
        self.version = version
        self.caps_link = caps_link

    def __eq__(self, other):
        return (isinstance(other, CapsInfo)
                and (self.service, self.version, self.caps_link) == (other.service, other.version, other.caps_link))

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.service, self.version, self.caps_link))

    def __repr__(self):
        return "CapsInfo(%s, %s, %s)" % (self.service, self.version, self.caps_link)


class CapabilitiesHomePageLinkProvider(metaclass=abc.ABCMeta):
    '''
        Extension point contributing service description document links
    '''

    @abc.abstractmethod
    def get_capabilities_links(self) -> List[CapsInfo]:
        pass


class ServiceInfoCapabilitiesProvider(CapabilitiesHomePageLinkProvider):
    '''
        GetCapabilities links for the registered services no ServiceDescriptionProvider
        already covers, pointing at the ows dispatcher.
    '''

    def __init__(self, extensions, ows_path: str = None):
        '''
            extensions: gshome.extensions.Extensions holding the providers and Service definitions
        '''
        self.extensions = extensions
        self.ows_path = ows_path if ows_path is not None else settings.OWS_PATH

    def _covered(self):
        skip = set()
        for provider in self.extensions.extensions(ServiceDescriptionProvider):
            for service in provider.get_services(None, None):
                skip.add(service.service.lower())
            for link in provider.get_service_links(None, None):
                skip.add(link.protocol.lower())
        return skip

    def get_capabilities_links(self):
        skip = self._covered()
        links = []
        for service in self.extensions.extensions(Service):
            if service.id.lower() in skip:
                continue
            elif service.custom_capabilities_link is not None:
                links.append(CapsInfo(service.id, service.version, service.custom_capabilities_link))
            elif GET_CAPABILITIES in service.operations:
                caps_link = "{}?service={}&version={}&request=GetCapabilities".format(
                    self.ows_path, service.id, service.version)
                links.append(CapsInfo(service.id, service.version, caps_link))
            else:
                logger.debug("%s has no capabilities document, not listed", service)
        return links
