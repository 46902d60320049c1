# flagquiz/domain/services/tiers.py
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

from flagquiz.core.errors import ConfigurationError
from flagquiz.domain.entities.country import Country

logger = logging.getLogger(__name__)

TIERS = (1, 2, 3)
DEFAULT_TIER = 3
BUNDLED_TIER_TABLE = Path(__file__).resolve().parents[2] / "data" / "flag_tiers.json"


@dataclass
class TierTable:
    """Tabla estática código -> tier (1 = icónica, 2 = conocida, 3 = el resto)."""

    version: str
    tiers: Dict[int, List[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Si un código aparece en varias listas gana el tier más fácil
        self._lookup: Dict[str, int] = {}
        for tier in sorted(self.tiers):
            for code in self.tiers[tier]:
                self._lookup.setdefault(code.strip().upper(), tier)

    def tier_of(self, code: str) -> int:
        return self._lookup.get(code.strip().upper(), DEFAULT_TIER)

    def partition(self, countries: Iterable[Country]) -> Dict[int, List[Country]]:
        buckets: Dict[int, List[Country]] = {tier: [] for tier in TIERS}
        for country in countries:
            buckets[self.tier_of(country.code)].append(country)
        return buckets

    @classmethod
    def from_mapping(cls, data: Mapping) -> "TierTable":
        try:
            version = str(data["version"])
            raw_tiers = data["tiers"]
            tiers: Dict[int, List[str]] = {}
            for key, codes in raw_tiers.items():
                tier = int(key)
                if tier not in TIERS:
                    raise ConfigurationError(f"Tier table: unknown tier {key!r}")
                if isinstance(codes, str) or not isinstance(codes, Sequence):
                    raise ConfigurationError(f"Tier table: tier {key!r} must be a list of codes")
                tiers[tier] = [str(c) for c in codes]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Tier table is malformed: {e}") from e
        return cls(version=version, tiers=tiers)


@lru_cache(maxsize=None)
def load_tier_table(path: str | None = None) -> TierTable:
    """Lee la tabla de tiers una sola vez por ruta."""
    table_path = Path(path) if path else BUNDLED_TIER_TABLE
    try:
        with open(table_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read tier table {table_path}: {e}") from e

    table = TierTable.from_mapping(data)
    logger.info(
        f"📊 Tabla de tiers v{table.version} cargada "
        f"({', '.join(f'tier {t}: {len(c)}' for t, c in sorted(table.tiers.items()))})"
    )
    return table
