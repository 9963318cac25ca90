'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .

Extensions are plain objects registered at startup, either explicitly or from
the "gshome.extensions" entry point group of installed plugins:

    [project.entry-points."gshome.extensions"]
    wms = "gshome_wms:WmsServiceDescriptionProvider"

Callers ask for the extensions implementing a capability class, for instance
ServiceDescriptionProvider, and get them in registration order.
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import inspect
import logging
from importlib.metadata import EntryPoint, entry_points
from typing import List

from gshome import settings
from gshome.common import ExtensionError

logger = logging.getLogger("gshome.extensions")


class Extensions(object):

    def __init__(self, extensions=()):
        self._extensions = []
        for extension in extensions:
            self.register(extension)

    def register(self, extension):
        if extension not in self._extensions:
            self._extensions.append(extension)
        return extension

    def unregister(self, extension):
        if extension in self._extensions:
            self._extensions.remove(extension)

    def extensions(self, capability: type) -> List:
        return [e for e in self._extensions if isinstance(e, capability)]

    def __len__(self):
        return len(self._extensions)

    def load_entry_points(self, group: str = None) -> List:
        '''
            Registers every extension of the entry point group, classes are
            instantiated without arguments. Returns the loaded extensions.
        '''
        if group is None:
            group = settings.PROVIDER_ENTRY_POINT_GROUP
        loaded = []
        for ep in entry_points(group=group):
            logger.debug("Found extension plugin: %s", ep.name)
            loaded.append(self.register(_load_extension(ep)))
        if loaded:
            logger.info("Loaded %d extensions from %s", len(loaded), group)
        return loaded


def _load_extension(ep: EntryPoint):
    try:
        target = ep.load()
    except Exception as e:
        msg = "Failed to load extension '{}': {}".format(ep.name, e)
        logger.error(msg)
        raise ExtensionError(msg) from e

    if not inspect.isclass(target):
        return target
    try:
        return target()
    except Exception as e:
        msg = "Failed to instantiate extension '{}': {}".format(ep.name, e)
        logger.error(msg)
        raise ExtensionError(msg) from e
