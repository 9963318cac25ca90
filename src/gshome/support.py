'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

from typing import List, Optional, Tuple
from urllib.parse import urljoin, quote, urlencode, urlparse
from xml.etree.ElementTree import Element


ATOM_LINK = "{http://www.w3.org/2005/Atom}link"


def build_url(base: str, seg: List[str], query: dict = None):
    """
    Create a URL from a list of path segments and an optional dict of query
    parameters.
        base:'http://localhost:8080/geoserver/rest'
        seg:['workspaces', 'geo', 'layergroups', 'roads.xml']
        query:{'quietOnNotFound': 'true'}
    return:
        'http://localhost:8080/geoserver/rest/workspaces/geo/layergroups/roads.xml?quietOnNotFound=true'
    """

    def clean_segment(segment):
        return segment.strip('/')

    seg = (quote(clean_segment(s)) for s in seg)
    if query is None or len(query) == 0:
        query_string = ''
    else:
        query_string = "?" + urlencode(query)
    path = '/'.join(seg) + query_string
    adjusted_base = base.rstrip('/') + '/'
    return urljoin(str(adjusted_base), str(path))


def is_blank(value) -> bool:
    return value is None or str(value).strip() == ''


def split_prefixed_name(name: str) -> Tuple[Optional[str], str]:
    '''
        'geo:roads' -> ('geo', 'roads'), 'roads' -> (None, 'roads')
        Only the first ':' separates, 'a:b:c' -> ('a', 'b:c')
    '''
    if name is not None and ':' in name:
        prefix, simple = name.split(':', 1)
        return prefix, simple
    return None, name


def xml_text(node: Element, path: str, default=None):
    if node is None:
        return default
    child = node.find(path)
    if child is None or child.text is None:
        return default
    return child.text.strip()


def xml_bool(node: Element, path: str, default=True) -> bool:
    text = xml_text(node, path)
    if text is None:
        return default
    return text.lower() == "true"


def atom_link(node: Element):
    if node is None:
        return None
    if 'href' in node.attrib:
        return node.attrib['href']
    link = node.find(ATOM_LINK)
    return link.get('href') if link is not None else None


def workspace_from_url(url):
    if url is None:
        return None
    parts = urlparse(url)
    split_path = parts.path.split('/')
    if 'workspaces' in split_path:
        return split_path[split_path.index('workspaces') + 1]
    else:
        return None
