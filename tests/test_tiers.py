"""
Tests for the flag tier table.
"""

import json
import os
import shutil
import tempfile
import unittest

from flagquiz.core.errors import ConfigurationError
from flagquiz.domain.services.tiers import TierTable, load_tier_table

from factories import make_country


class TestTierTable(unittest.TestCase):

    def setUp(self):
        self.table = TierTable(version="test", tiers={1: ["FR", "US"], 2: ["PE", "us"]})

    def test_unlisted_codes_default_to_tier_three(self):
        self.assertEqual(self.table.tier_of("ZZ"), 3)

    def test_lookup_is_case_insensitive(self):
        self.assertEqual(self.table.tier_of("fr"), 1)
        self.assertEqual(self.table.tier_of("pe"), 2)

    def test_overlap_resolves_to_easiest_tier(self):
        self.assertEqual(self.table.tier_of("US"), 1)

    def test_partition(self):
        countries = [make_country(code) for code in ("FR", "PE", "ZZ", "US")]
        buckets = self.table.partition(countries)
        self.assertEqual([c.code for c in buckets[1]], ["FR", "US"])
        self.assertEqual([c.code for c in buckets[2]], ["PE"])
        self.assertEqual([c.code for c in buckets[3]], ["ZZ"])

    def test_from_mapping_rejects_unknown_tier(self):
        with self.assertRaises(ConfigurationError):
            TierTable.from_mapping({"version": "1", "tiers": {"4": ["FR"]}})

    def test_from_mapping_rejects_malformed_table(self):
        with self.assertRaises(ConfigurationError):
            TierTable.from_mapping({"tiers": {"1": ["FR"]}})
        with self.assertRaises(ConfigurationError):
            TierTable.from_mapping({"version": "1", "tiers": {"1": "FR"}})


class TestLoadTierTable(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_bundled_table_is_disjoint(self):
        table = load_tier_table()
        self.assertTrue(table.tiers[1])
        self.assertFalse(set(table.tiers[1]) & set(table.tiers[2]))
        self.assertEqual(table.tier_of("FR"), 1)
        self.assertEqual(table.tier_of("TV"), 3)

    def test_custom_table_from_path(self):
        path = os.path.join(self.temp_dir, "tiers.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"version": "custom", "tiers": {"1": ["TV"]}}, f)

        table = load_tier_table(path)
        self.assertEqual(table.version, "custom")
        self.assertEqual(table.tier_of("TV"), 1)

    def test_missing_file_raises_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            load_tier_table(os.path.join(self.temp_dir, "nope.json"))


if __name__ == '__main__':
    unittest.main()
