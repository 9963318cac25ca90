'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import os


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _env_list(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return list(default)
    return [s.strip().lower() for s in value.split(',') if s.strip()]


# GeoServer REST endpoint backing gshome.catalog.Catalog
REST_URL = os.getenv("GSHOME_REST_URL", "http://localhost:8080/geoserver/rest")
USERNAME = os.getenv("GSHOME_USERNAME", "admin")
PASSWORD = os.getenv("GSHOME_PASSWORD", "geoserver")
VALIDATE_SSL = _env_bool("GSHOME_VALIDATE_SSL", True)
# seconds a GET response stays in the catalog cache
CACHE_SECONDS = int(os.getenv("GSHOME_CACHE_SECONDS", 5))
# transport level retries of catalog reads, none by default
REST_RETRIES = int(os.getenv("GSHOME_REST_RETRIES", 0))

# well known services first, anything else is appended in first-seen order
SERVICE_ORDER = _env_list("GSHOME_SERVICE_ORDER", ["wms", "wmts", "wfs", "wcs", "wps", "rest"])

# list layer groups in CONTAINER mode alongside layers
INCLUDE_CONTAINER_GROUPS = _env_bool("GSHOME_INCLUDE_CONTAINER_GROUPS", True)

# selecting a bare layer name keeps the selected workspace instead of clearing it
BARE_LAYER_KEEPS_WORKSPACE = _env_bool("GSHOME_BARE_LAYER_KEEPS_WORKSPACE", False)

# global services switch of the server, only changes the page description
GLOBAL_SERVICES = _env_bool("GSHOME_GLOBAL_SERVICES", True)

# root of the OWS dispatcher, relative to the web console
OWS_PATH = os.getenv("GSHOME_OWS_PATH", "../ows")

PROVIDER_ENTRY_POINT_GROUP = "gshome.extensions"
