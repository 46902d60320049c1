"""
Shared builders for test data (countries, provider records, fake sources).
"""

from flagquiz.core.errors import FetchError
from flagquiz.domain.entities.country import Country
from flagquiz.domain.services.tiers import load_tier_table


def make_country(code, name=None):
    return Country(
        name=name or f"Country {code}",
        code=code,
        flag_image_url=f"https://flagcdn.com/w320/{code.lower()}.png",
    )


def make_countries(n, prefix="C"):
    return [make_country(f"{prefix}{i:03d}") for i in range(n)]


def make_world(total=195):
    """Every code of the bundled tier table plus synthetic tier-3 codes up to `total`."""
    table = load_tier_table()
    codes = [code for tier in sorted(table.tiers) for code in table.tiers[tier]]
    countries = [make_country(code) for code in codes[:total]]
    countries += make_countries(total - len(countries), prefix="Z")
    return countries


def make_record(name, cca2, un_member=True, **extra):
    record = {"name": {"common": name, "official": f"Republic of {name}"}, "cca2": cca2, "unMember": un_member}
    record.update(extra)
    return record


class FakeSource:
    """Stands in for RestCountriesSource; counts calls and can fail on demand."""

    def __init__(self, countries=None, error=None):
        self.countries = list(countries or [])
        self.error = error
        self.calls = 0

    def fetch_eligible_countries(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.countries)

    def fail_with(self, message="REST Countries fetch failed: 503"):
        self.error = FetchError(message)
