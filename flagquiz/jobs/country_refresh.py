# flagquiz/jobs/country_refresh.py
import logging
import sys
from collections import Counter

from flagquiz.core.config import settings
from flagquiz.core.errors import FetchError
from flagquiz.core.logging import setup_logging
from flagquiz.domain.services.tiers import TIERS, load_tier_table
from flagquiz.infra.countries.restcountries import fetch_eligible_countries

logger = logging.getLogger(__name__)


def run() -> int:
    """
    Descarga una vez los países elegibles y reporta conteos por tier.
    Sirve para detectar cambios en REST Countries y huecos en la tabla de tiers.
    """
    table = load_tier_table(settings.TIER_TABLE_PATH)

    try:
        countries = fetch_eligible_countries(settings)
    except FetchError as e:
        logger.error(f"❌ {e.message}")
        return 1

    per_tier = Counter(table.tier_of(c.code) for c in countries)
    logger.info(f"Países elegibles: {len(countries)}")
    for tier in TIERS:
        logger.info(f"  tier {tier}: {per_tier.get(tier, 0)}")

    # Códigos de la tabla que ya no vienen del proveedor
    known = {c.code for c in countries}
    missing = sorted(
        code.upper()
        for tier, codes in table.tiers.items()
        for code in codes
        if code.upper() not in known
    )
    if missing:
        logger.warning(f"⚠️ Códigos en la tabla de tiers sin país elegible: {', '.join(missing)}")

    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(run())
