'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

from xml.etree.ElementTree import Element

from gshome.support import xml_text, xml_bool


class Workspace(object):
    resource_type = "workspace"

    def __init__(self, name: str, isolated: bool = False):
        '''
            name: workspace name, case sensitive
        '''
        self.name = name
        self.isolated = isolated

    def __eq__(self, other):
        return isinstance(other, Workspace) and self.name == other.name

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return "Workspace(%s)" % self.name


class Namespace(object):
    '''
        Every workspace has a namespace sharing its name as prefix
    '''
    resource_type = "namespace"

    def __init__(self, prefix: str, uri: str = None):
        self.prefix = prefix
        self.uri = uri

    def qualify(self, name: str) -> str:
        return "%s:%s" % (self.prefix, name)

    def __eq__(self, other):
        return isinstance(other, Namespace) and self.prefix == other.prefix

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.prefix)

    def __repr__(self):
        return "Namespace(%s, %s)" % (self.prefix, self.uri)


def workspace_from_index(node: Element) -> Workspace:
    '''
        node: <workspace><name>geo</name>...</workspace>
    '''
    return Workspace(xml_text(node, "name"), xml_bool(node, "isolated", default=False))


def namespace_from_index(node: Element) -> Namespace:
    '''
        node: <namespace><prefix>geo</prefix><uri>http://geo.example.org</uri></namespace>
        the list form carries <name> instead of <prefix>
    '''
    prefix = xml_text(node, "prefix") or xml_text(node, "name")
    return Namespace(prefix, xml_text(node, "uri"))
