"""
Tests for the in-memory country cache.
"""

import unittest

from flagquiz.core.errors import FetchError, NotReadyError
from flagquiz.infra.cache.country_cache import CountryCache

from factories import FakeSource, make_countries


class TestCountryCache(unittest.TestCase):

    def setUp(self):
        self.countries = make_countries(195)
        self.source = FakeSource(self.countries)

    def test_get_loads_lazily_once(self):
        cache = CountryCache(self.source)
        self.assertFalse(cache.ready())

        first = cache.get()
        second = cache.get()

        self.assertEqual(len(first), 195)
        self.assertEqual(first, second)
        self.assertEqual(self.source.calls, 1)
        self.assertIsNotNone(cache.loaded_at)

    def test_reload_twice_yields_same_codes(self):
        cache = CountryCache(self.source)
        first = {c.code for c in cache.reload()}
        second = {c.code for c in cache.reload()}
        self.assertEqual(first, second)
        self.assertEqual(len(cache), 195)

    def test_failed_reload_keeps_previous_data(self):
        cache = CountryCache(self.source)
        cache.reload()
        self.source.fail_with()

        with self.assertRaises(FetchError):
            cache.reload()

        self.assertTrue(cache.ready())
        self.assertEqual(len(cache.get()), 195)
        self.assertIn("503", cache.last_error)

    def test_failed_first_load_stays_empty(self):
        self.source.fail_with()
        cache = CountryCache(self.source)

        with self.assertRaises(FetchError):
            cache.get()
        self.assertFalse(cache.ready())
        self.assertIsNone(cache.loaded_at)

    def test_empty_result_does_not_replace_cache(self):
        cache = CountryCache(self.source)
        cache.reload()
        self.source.countries = []

        with self.assertRaises(FetchError):
            cache.reload()
        self.assertEqual(len(cache), 195)

    def test_not_ready_when_on_demand_load_disabled(self):
        cache = CountryCache(self.source, load_on_demand=False)
        with self.assertRaises(NotReadyError):
            cache.ensure_loaded()
        self.assertEqual(self.source.calls, 0)

        cache.reload()
        self.assertEqual(len(cache.ensure_loaded()), 195)

    def test_returned_list_is_a_copy(self):
        cache = CountryCache(self.source)
        cache.get().clear()
        self.assertEqual(len(cache.get()), 195)


if __name__ == '__main__':
    unittest.main()
