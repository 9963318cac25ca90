import unittest

from gshome.filters import (published_filter, equal, is_instance_of, accept_all, layer_scope_filter,
                            group_scope_filter, property_value)
from gshome.layer import LayerGroupMode
from gshome.memory import MemoryCatalog


class PublishedFilterTest(unittest.TestCase):

    def setUp(self):
        self.catalog = MemoryCatalog()
        self.catalog.add_workspace("geo")
        self.catalog.add_workspace("topp")
        db = self.catalog.add_store("db", "geo")
        off = self.catalog.add_store("off", "geo", enabled=False)
        topp_db = self.catalog.add_store("db", "topp")
        self.roads = self.catalog.add_layer("roads", db)
        self.rivers = self.catalog.add_layer("rivers", db, advertised=False)
        self.disabled = self.catalog.add_layer("disabled", db, enabled=False)
        self.legacy = self.catalog.add_layer("legacy", off)
        self.states = self.catalog.add_layer("states", topp_db)
        self.basemap = self.catalog.add_layergroup("basemap")
        self.hidden = self.catalog.add_layergroup("hidden", "geo", advertised=False)
        self.tour = self.catalog.add_layergroup("tour", "geo", mode=LayerGroupMode.CONTAINER)
        self.named = self.catalog.add_layergroup("named", "topp", mode=LayerGroupMode.NAMED)

    def test_scoped_filter_excludes_unadvertised_layer(self):
        visible = published_filter("geo")
        self.assertTrue(self.rivers.enabled)
        self.assertFalse(visible(self.rivers))
        self.assertTrue(visible(self.roads))

    def test_disabled_layer_or_store_excluded(self):
        visible = published_filter()
        self.assertFalse(visible(self.disabled))
        self.assertFalse(visible(self.legacy))

    def test_global_scope_includes_every_workspace(self):
        visible = published_filter(None, include_containers=True)
        for info in (self.roads, self.states, self.basemap, self.tour, self.named):
            self.assertTrue(visible(info), info)
        self.assertFalse(visible(self.hidden))

    def test_workspace_scope(self):
        visible = published_filter("topp", include_containers=True)
        self.assertTrue(visible(self.states))
        self.assertTrue(visible(self.named))
        self.assertFalse(visible(self.roads))
        self.assertFalse(visible(self.tour))
        self.assertFalse(visible(self.basemap))

    def test_container_groups_policy(self):
        self.assertTrue(published_filter("geo", include_containers=True)(self.tour))
        self.assertFalse(published_filter("geo", include_containers=False)(self.tour))
        self.assertTrue(published_filter(None, include_containers=False)(self.basemap))
        self.assertTrue(published_filter(None, include_containers=False)(self.named))

    def test_catalog_count(self):
        self.assertEqual(5, self.catalog.count("published", published_filter(None, include_containers=True)))
        self.assertEqual(2, self.catalog.count("published", published_filter("geo", include_containers=True)))

    def test_scope_filters(self):
        self.assertEqual(5, self.catalog.count("layer", layer_scope_filter(None)))
        self.assertEqual(4, self.catalog.count("layer", layer_scope_filter("geo")))
        self.assertEqual(2, self.catalog.count("layerGroup", group_scope_filter("geo")))


class PredicateTest(unittest.TestCase):

    def setUp(self):
        catalog = MemoryCatalog()
        catalog.add_workspace("geo")
        self.layer = catalog.add_layer("roads", catalog.add_store("db", "geo"))
        self.group = catalog.add_layergroup("basemap")

    def test_missing_path_never_equal(self):
        self.assertFalse(equal("workspace.name", None)(self.group))
        self.assertFalse(equal("resource.enabled", True)(self.group))

    def test_property_value(self):
        self.assertEqual("geo", property_value(self.layer, "resource.namespace.prefix"))

    def test_operators(self):
        is_layer = is_instance_of("layer")
        is_group = is_instance_of("layerGroup")
        self.assertTrue((is_layer | is_group)(self.group))
        self.assertFalse((is_layer & is_group)(self.layer))
        self.assertTrue((~is_group)(self.layer))
        self.assertTrue(accept_all()(self.layer))


if __name__ == '__main__':
    unittest.main()
