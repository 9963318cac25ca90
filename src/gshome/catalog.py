'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

import logging
from datetime import datetime, timedelta
from urllib.parse import urlparse, urlencode, parse_qsl
from xml.etree.ElementTree import XML, Element
from xml.parsers.expat import ExpatError

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from gshome import settings
from gshome.common import FailedRequestError, CatalogUnavailableError
from gshome.facade import (CatalogFacade, CloseableIterator, NO_WORKSPACE, ANY_WORKSPACE,
                           WORKSPACE, STORE, LAYER, LAYERGROUP, check_kind, matching)
from gshome.layer import Layer, LayerGroup, resource_from_dom, layergroup_from_dom
from gshome.store import store_from_dom
from gshome.support import build_url, atom_link, is_blank, xml_text
from gshome.workspace import Workspace, workspace_from_index, namespace_from_index

logger = logging.getLogger("gshome.catalog")


class Catalog(CatalogFacade):
    """
    Read only view of a GeoServer catalog through the RESTConfig API.
    This covers what the home page needs:
    - Workspaces and their namespaces
    - Stores, only to count them and to know whether they are enabled
    - Layers together with their resource and store
    - LayerGroups, global and workspace specific

    Predicates handed to count() and list() are evaluated on the client,
    the REST API has no query language to push them down to.
    """

    def __init__(self, service_url: str = None, username: str = None, password: str = None,
                 validate_ssl_certificate: bool = None, access_token: str = None,
                 cache_seconds: int = None, retries: int = None):
        self.service_url = (service_url or settings.REST_URL).rstrip("/")
        self.username = username if username is not None else settings.USERNAME
        self.password = password if password is not None else settings.PASSWORD
        if validate_ssl_certificate is None:
            validate_ssl_certificate = settings.VALIDATE_SSL
        self.validate_ssl_certificate = validate_ssl_certificate
        self.access_token = access_token
        self.cache_seconds = cache_seconds if cache_seconds is not None else settings.CACHE_SECONDS
        self.retries = retries if retries is not None else settings.REST_RETRIES
        self.setup_connection()

        # rest_url -> (fetched at, raw content)
        self._cache = {}

    def __getstate__(self):
        '''http connection cannot be pickled'''
        state = dict(vars(self))
        state['client'] = None
        return state

    def __setstate__(self, state):
        '''restore http connection upon unpickling'''
        self.__dict__.update(state)
        self.setup_connection()

    def setup_connection(self):
        self.client = requests.session()
        self.client.verify = self.validate_ssl_certificate
        parsed_url = urlparse(self.service_url)
        # only reads go through this client
        retry = Retry(
            total=self.retries,
            status=self.retries,
            backoff_factor=0.9,
            status_forcelist=[502, 503, 504],
            allowed_methods=frozenset(['HEAD', 'GET', 'OPTIONS'])
        )
        self.client.mount("{}://".format(parsed_url.scheme), HTTPAdapter(max_retries=retry))

    def http_request(self, url, method='get', headers=None):
        req_method = getattr(self.client, method.lower())
        headers = dict(headers or {})
        headers.setdefault("Accept", "application/xml")

        try:
            if self.access_token:
                headers['Authorization'] = "Bearer {}".format(self.access_token)
                parsed_url = urlparse(url)
                params = parse_qsl(parsed_url.query.strip())
                params.append(('access_token', self.access_token))
                params = urlencode(params)
                url = "{proto}://{address}{path}?{params}".format(proto=parsed_url.scheme,
                                                                  address=parsed_url.netloc,
                                                                  path=parsed_url.path, params=params)
                resp = req_method(url, headers=headers)
            else:
                resp = req_method(url, headers=headers, auth=(self.username, self.password))
        except requests.exceptions.RequestException as e:
            raise CatalogUnavailableError("GeoServer catalog unreachable [GET {}]: {}".format(url, e)) from e
        return resp

    def get_xml(self, rest_url: str) -> Element:
        '''
            Parsed response of a GET, answered from the cache for cache_seconds
        '''
        cached_response = self._cache.get(rest_url)

        def is_valid(cached_response):
            return (cached_response is not None
                    and datetime.now() - cached_response[0] < timedelta(seconds=self.cache_seconds))

        def parse_or_raise(xml) -> Element:
            try:
                return XML(xml)
            except (ExpatError, SyntaxError) as e:
                msg = "GeoServer gave non-XML response for [GET %s]: %s"
                msg = msg % (rest_url, xml)
                raise FailedRequestError(msg) from e

        if is_valid(cached_response):
            return parse_or_raise(cached_response[1])
        elif cached_response is not None:
            self._cache.pop(rest_url, None)

        resp = self.http_request(rest_url)
        if resp.status_code == 200:
            self._evict_expired()
            self._cache[rest_url] = (datetime.now(), resp.content)
            return parse_or_raise(resp.content)
        elif resp.status_code >= 500:
            raise CatalogUnavailableError(
                'GeoServer catalog failed [GET {}]: {}, {}'.format(rest_url, resp.status_code, resp.text),
                resp.status_code)
        else:
            raise FailedRequestError(
                'Failed to make GET request [{}]: {}, {}'.format(rest_url, resp.status_code, resp.text),
                resp.status_code)

    def _get_xml_or_none(self, rest_url: str):
        try:
            return self.get_xml(rest_url)
        except FailedRequestError as e:
            if e.status_code == 404:
                logger.debug("Nothing found at %s", rest_url)
                return None
            raise

    def clear_cache(self):
        self._cache.clear()

    def _evict_expired(self):
        oldest = datetime.now() - timedelta(seconds=self.cache_seconds)
        for url in [url for url, (fetched, _) in self._cache.items() if fetched <= oldest]:
            self._cache.pop(url, None)

    def get_workspaces(self):
        data = self.get_xml("{}/workspaces.xml".format(self.service_url))
        return [workspace_from_index(node) for node in data.findall("workspace")]

    def get_workspace_by_name(self, name):
        if is_blank(name):
            return None
        dom = self._get_xml_or_none(build_url(self.service_url, ["workspaces", name + ".xml"]))
        return workspace_from_index(dom) if dom is not None else None

    def get_default_workspace(self):
        return workspace_from_index(self.get_xml("{}/workspaces/default.xml".format(self.service_url)))

    def get_namespace_by_prefix(self, prefix):
        if is_blank(prefix):
            return None
        dom = self._get_xml_or_none(build_url(self.service_url, ["namespaces", prefix + ".xml"]))
        return namespace_from_index(dom) if dom is not None else None

    def get_stores(self, workspace=None):
        '''
            stores of one workspace, or of every workspace when workspace is None
        '''
        if workspace is None:
            workspaces = self.get_workspaces()
        else:
            workspaces = [workspace]

        stores = []
        for ws in workspaces:
            for listing, tag in (("datastores.xml", "dataStore"),
                                 ("coveragestores.xml", "coverageStore"),
                                 ("wmsstores.xml", "wmsStore")):
                data = self._get_xml_or_none(build_url(self.service_url, ["workspaces", ws.name, listing]))
                if data is None:
                    continue
                for node in data.findall(tag):
                    stores.append(store_from_dom(self.get_xml(atom_link(node)), ws))
        return stores

    def _layer_from_dom(self, dom: Element) -> Layer:
        '''
            A layer document only links to its resource, which links to its store;
            both are needed to know whether the layer is visible.
        '''
        resource_dom = self.get_xml(atom_link(dom.find("resource")))
        namespace = namespace_from_index(resource_dom.find("namespace"))
        store = store_from_dom(self.get_xml(atom_link(resource_dom.find("store"))))
        return Layer(resource_from_dom(resource_dom, namespace, store), xml_text(dom, "type", "VECTOR"))

    def get_layer_by_name(self, name):
        '''
            GeoServer resolves a bare name against the default workspace first
        '''
        if is_blank(name):
            return None
        dom = self._get_xml_or_none(build_url(self.service_url, ["layers", name + ".xml"]))
        return self._layer_from_dom(dom) if dom is not None else None

    def get_layers(self):
        data = self.get_xml("{}/layers.xml".format(self.service_url))
        return [self._layer_from_dom(self.get_xml(atom_link(node))) for node in data.findall("layer")]

    def _layergroup(self, dom: Element, workspace: Workspace = None) -> LayerGroup:
        group = layergroup_from_dom(dom)
        # groups listed under a workspace may leave out their <workspace> element
        if group.workspace is None and workspace is not None:
            group = LayerGroup(group.name, workspace, group.mode, group.enabled, group.advertised, group.title)
        return group

    def get_layer_groups(self, scope=ANY_WORKSPACE):
        '''
            scope: NO_WORKSPACE for global groups, a Workspace, or ANY_WORKSPACE for
            global groups followed by the groups of every workspace
        '''
        layergroups = []
        if scope is NO_WORKSPACE or scope is ANY_WORKSPACE:
            groups = self.get_xml("{}/layergroups.xml".format(self.service_url))
            layergroups.extend([self._layergroup(self.get_xml(atom_link(g))) for g in groups.findall("layerGroup")])
        if scope is NO_WORKSPACE:
            return layergroups

        workspaces = self.get_workspaces() if scope is ANY_WORKSPACE else [scope]
        for ws in workspaces:
            groups = self._get_xml_or_none(build_url(self.service_url, ["workspaces", ws.name, "layergroups.xml"]))
            if groups is None:
                continue
            layergroups.extend([self._layergroup(self.get_xml(atom_link(g)), ws) for g in groups.findall("layerGroup")])
        return layergroups

    def get_layer_group_by_name(self, scope, name):
        if is_blank(name):
            return None
        if scope is ANY_WORKSPACE:
            groups = [g for g in self.get_layer_groups(ANY_WORKSPACE) if g.name == name]
            return groups[0] if groups else None
        if scope is NO_WORKSPACE:
            url = build_url(self.service_url, ["layergroups", name + ".xml"])
            workspace = None
        elif isinstance(scope, Workspace):
            url = build_url(self.service_url, ["workspaces", scope.name, "layergroups", name + ".xml"])
            workspace = scope
        else:
            raise ValueError("Can't interpret %s as a layer group scope" % (scope,))

        dom = self._get_xml_or_none(url)
        return self._layergroup(dom, workspace) if dom is not None else None

    def _objects(self, kind):
        if kind == WORKSPACE:
            return self.get_workspaces()
        if kind == STORE:
            return self.get_stores()
        if kind == LAYER:
            return self.get_layers()
        if kind == LAYERGROUP:
            return self.get_layer_groups()
        return self.get_layers() + self.get_layer_groups()

    def list(self, kind, predicate=None):
        check_kind(kind)
        return CloseableIterator(matching(self._objects(kind), predicate))
