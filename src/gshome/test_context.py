import unittest

from gshome.common import CatalogUnavailableError
from gshome.context import (ContextResolver, RequestContext, to_workspace, to_layer, workspace_changed,
                            layer_changed, published_choices, count_published)
from gshome.layer import LayerGroupMode
from gshome.memory import MemoryCatalog


def sample_catalog():
    catalog = MemoryCatalog()
    catalog.add_workspace("geo")
    catalog.add_workspace("topp")
    catalog.add_workspace("other")
    roads_db = catalog.add_store("roads_db", "geo")
    old_db = catalog.add_store("old_db", "geo", enabled=False)
    states_db = catalog.add_store("states_db", "topp")
    catalog.add_layer("roads", roads_db)
    catalog.add_layer("rivers", roads_db, advertised=False)
    catalog.add_layer("legacy", old_db)
    catalog.add_layer("states", states_db)
    catalog.add_layer("roads", states_db)
    catalog.add_layer("parcels", states_db, enabled=False)
    catalog.add_layergroup("basemap")
    catalog.add_layergroup("hidden", advertised=False)
    catalog.add_layergroup("tour", "geo", mode=LayerGroupMode.CONTAINER)
    catalog.add_layergroup("overview", "topp", mode=LayerGroupMode.NAMED)
    return catalog


class ContextResolverTest(unittest.TestCase):

    def setUp(self):
        self.catalog = sample_catalog()
        self.resolver = ContextResolver(self.catalog)

    def test_blank_parameters_give_global_context(self):
        for workspace, layer in ((None, None), ("", ""), ("  ", None)):
            context = self.resolver.resolve(workspace, layer)
            self.assertTrue(context.is_global)
            self.assertEqual({"workspace": None, "layer": None}, context.parameters())

    def test_workspace_only(self):
        context = self.resolver.resolve("geo", None)
        self.assertEqual("geo", context.workspace_name)
        self.assertIsNone(context.published)

    def test_unknown_workspace_is_not_an_error(self):
        context = self.resolver.resolve("nowhere", None)
        self.assertIsNone(context.workspace)
        self.assertTrue(context.is_global)
        self.assertEqual("nowhere", context.workspace_param)

    def test_unknown_layer_is_not_an_error(self):
        context = self.resolver.resolve("geo", "nothing")
        self.assertEqual("geo", context.workspace_name)
        self.assertIsNone(context.published)

    def test_prefix_agrees_with_workspace(self):
        explicit = self.resolver.resolve("geo", "geo:roads")
        implicit = self.resolver.resolve(None, "geo:roads")
        self.assertEqual(explicit, implicit)
        self.assertEqual("geo", implicit.workspace_name)
        self.assertEqual("geo:roads", implicit.published.prefixed_name)

    def test_prefix_overrides_workspace(self):
        context = self.resolver.resolve("other", "geo:roads")
        self.assertEqual("geo", context.workspace_name)
        self.assertEqual("geo:roads", context.published.prefixed_name)

    def test_prefix_overrides_unknown_workspace(self):
        context = self.resolver.resolve("nowhere", "topp:roads")
        self.assertEqual("topp", context.workspace_name)
        self.assertEqual("topp:roads", context.published.prefixed_name)

    def test_bare_layer_in_workspace(self):
        context = self.resolver.resolve("topp", "roads")
        self.assertEqual("topp:roads", context.published.prefixed_name)
        self.assertEqual("topp", context.workspace_name)

    def test_bare_layer_outside_workspace_not_found(self):
        context = self.resolver.resolve("geo", "states")
        self.assertIsNone(context.published)
        self.assertEqual("geo", context.workspace_name)

    def test_bare_layer_infers_workspace(self):
        # default workspace first
        context = self.resolver.resolve(None, "roads")
        self.assertEqual("geo:roads", context.published.prefixed_name)
        self.assertEqual("geo", context.workspace_name)

        context = self.resolver.resolve(None, "states")
        self.assertEqual("topp", context.workspace_name)

    def test_global_layer_group(self):
        context = self.resolver.resolve(None, "basemap")
        self.assertTrue(context.published.is_layergroup)
        self.assertIsNone(context.workspace)
        self.assertEqual({"workspace": None, "layer": "basemap"}, context.parameters())

    def test_layer_group_of_any_workspace(self):
        context = self.resolver.resolve(None, "overview")
        self.assertEqual("overview", context.layer_name)
        self.assertEqual("topp", context.workspace_name)

    def test_workspace_layer_group(self):
        context = self.resolver.resolve("geo", "tour")
        self.assertTrue(context.published.is_layergroup)
        self.assertEqual(LayerGroupMode.CONTAINER, context.published.mode)
        self.assertIsNone(self.resolver.resolve("geo", "overview").published)

    def test_extra_separators_are_lenient(self):
        context = self.resolver.resolve(None, "geo:roads:extra")
        self.assertEqual("geo", context.workspace_name)
        self.assertIsNone(context.published)

    def test_resolution_is_idempotent(self):
        first = self.resolver.resolve("other", "topp:states")
        second = self.resolver.resolve("other", "topp:states")
        self.assertEqual(first, second)

    def test_resource_workspace_wins_over_context(self):
        states = self.catalog.get_layer_by_name("topp:states")

        class Misrouting(MemoryCatalog):
            def get_layer_by_name(self, name):
                return states

        catalog = Misrouting()
        catalog.add_workspace("geo")
        context = ContextResolver(catalog).resolve("geo", "roads")
        self.assertEqual("topp", context.workspace_name)
        self.assertIs(states, context.published)

    def test_catalog_failure_propagates(self):

        class Unreachable(MemoryCatalog):
            def get_workspace_by_name(self, name):
                raise CatalogUnavailableError("connection refused")

        with self.assertRaises(CatalogUnavailableError):
            ContextResolver(Unreachable()).resolve("geo", None)


class ParameterTest(unittest.TestCase):

    def test_to_workspace_prefixed(self):
        for workspace in (None, "", "geo", "other"):
            self.assertEqual("geo", to_workspace(workspace, "geo:roads"))
        self.assertEqual("geo", to_workspace("other", "geo:roads:extra"))

    def test_to_workspace_bare(self):
        self.assertIsNone(to_workspace("geo", "roads"))
        self.assertIsNone(to_workspace(None, "roads"))
        self.assertEqual("geo", to_workspace("geo", "roads", keep_workspace=True))

    def test_to_workspace_blank_layer(self):
        for layer in (None, "", "  "):
            self.assertEqual("geo", to_workspace("geo", layer))
        self.assertIsNone(to_workspace(None, None))

    def test_to_layer(self):
        self.assertEqual("roads", to_layer("other", "geo:roads"))
        self.assertEqual("roads:extra", to_layer(None, "geo:roads:extra"))
        self.assertEqual("roads", to_layer("geo", "roads"))
        self.assertIsNone(to_layer("geo", ""))
        self.assertIsNone(to_layer("geo", None))

    def test_round_trip(self):
        for name in ("geo:roads", "topp:states", "a:b:c", "ws:res"):
            self.assertEqual(name, to_workspace(None, name) + ":" + to_layer(None, name))

    def test_selection_changes(self):
        self.assertEqual({"workspace": "geo", "layer": None}, workspace_changed("geo"))
        self.assertEqual({"workspace": None, "layer": None}, workspace_changed(""))
        self.assertEqual({"workspace": "topp", "layer": "states"}, layer_changed("geo", "topp:states"))
        self.assertEqual({"workspace": None, "layer": "basemap"}, layer_changed("geo", "basemap",
                                                                                 keep_workspace=False))
        self.assertEqual({"workspace": "geo", "layer": "basemap"}, layer_changed("geo", "basemap",
                                                                                 keep_workspace=True))
        self.assertEqual({"workspace": "geo", "layer": None}, layer_changed("geo", None))


class PublishedChoicesTest(unittest.TestCase):

    def setUp(self):
        self.catalog = sample_catalog()

    def test_global_choices_sorted(self):
        choices = published_choices(self.catalog, RequestContext(), include_containers=True)
        self.assertEqual(["basemap", "geo:roads", "geo:tour", "topp:overview", "topp:roads", "topp:states"],
                         [c.prefixed_name for c in choices])
        self.assertEqual(6, count_published(self.catalog, RequestContext(), include_containers=True))

    def test_without_containers(self):
        choices = published_choices(self.catalog, RequestContext(), include_containers=False)
        self.assertNotIn("geo:tour", [c.prefixed_name for c in choices])

    def test_workspace_choices(self):
        context = ContextResolver(self.catalog).resolve("topp", None)
        choices = published_choices(self.catalog, context, include_containers=True)
        self.assertEqual(["topp:overview", "topp:roads", "topp:states"], [c.prefixed_name for c in choices])


if __name__ == '__main__':
    unittest.main()
