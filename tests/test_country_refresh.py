"""
Tests for the one-shot country refresh job.
"""

import unittest
from unittest.mock import patch

from flagquiz.core.errors import FetchError
from flagquiz.jobs import country_refresh

from factories import make_countries, make_world


class TestCountryRefreshJob(unittest.TestCase):

    @patch("flagquiz.jobs.country_refresh.fetch_eligible_countries")
    def test_success_reports_tiers_and_exits_zero(self, mock_fetch):
        mock_fetch.return_value = make_world()

        with self.assertLogs("flagquiz.jobs.country_refresh", level="INFO") as logs:
            self.assertEqual(country_refresh.run(), 0)

        output = "\n".join(logs.output)
        self.assertIn("195", output)
        self.assertIn("tier 1: 40", output)
        self.assertNotIn("WARNING", output)
        mock_fetch.assert_called_once()

    @patch("flagquiz.jobs.country_refresh.fetch_eligible_countries")
    def test_missing_tier_codes_are_reported(self, mock_fetch):
        mock_fetch.return_value = make_countries(10)

        with self.assertLogs("flagquiz.jobs.country_refresh", level="WARNING") as logs:
            self.assertEqual(country_refresh.run(), 0)

        self.assertIn("FR", "\n".join(logs.output))

    @patch("flagquiz.jobs.country_refresh.fetch_eligible_countries")
    def test_fetch_error_exits_one(self, mock_fetch):
        mock_fetch.side_effect = FetchError("REST Countries fetch failed: 502")

        with self.assertLogs("flagquiz.jobs.country_refresh", level="ERROR") as logs:
            self.assertEqual(country_refresh.run(), 1)

        self.assertIn("502", "\n".join(logs.output))


if __name__ == '__main__':
    unittest.main()
