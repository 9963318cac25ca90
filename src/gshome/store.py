'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

from xml.etree.ElementTree import Element

from gshome.support import xml_text, xml_bool, split_prefixed_name
from gshome.workspace import Workspace

DATA_STORE = "dataStore"
COVERAGE_STORE = "coverageStore"
WMS_STORE = "wmsStore"


class Store(object):
    '''
        A data, coverage or cascaded WMS store; every store lives in one workspace
    '''
    resource_type = "store"

    def __init__(self, name: str, workspace: Workspace, enabled: bool = True, type: str = DATA_STORE):
        assert isinstance(workspace, Workspace)
        self.name = name
        self.workspace = workspace
        self.enabled = enabled
        self.type = type

    def __repr__(self):
        return "%s(%s:%s)" % (self.type, self.workspace.name, self.name)


def store_from_dom(node: Element, workspace: Workspace = None) -> Store:
    '''
        node: <dataStore><name>roads_db</name><enabled>true</enabled><workspace><name>geo</name></workspace></dataStore>
        the tag of the node is the store type
    '''
    ws_name, name = split_prefixed_name(xml_text(node, "name"))
    if workspace is None:
        workspace = Workspace(xml_text(node, "workspace/name") or ws_name)
    return Store(name, workspace, xml_bool(node, "enabled", default=True), node.tag)
