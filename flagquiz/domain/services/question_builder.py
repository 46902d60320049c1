# flagquiz/domain/services/question_builder.py
import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from flagquiz.core.config import Settings, settings as default_settings
from flagquiz.core.errors import InternalError, QueryValidationError
from flagquiz.domain.entities.country import Country, Question
from flagquiz.domain.services.tiers import TIERS, TierTable, load_tier_table

logger = logging.getLogger(__name__)

QUICKFIRE = "quickfire"
HARDMODE = "hardmode"
MODES = (QUICKFIRE, HARDMODE)

WRONG_CHOICES = 3


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Random nuevo por petición; con semilla las partidas son reproducibles."""
    return random.Random(seed)


def build_question(
    country: Country,
    eligible_pool: Iterable[Country],
    rng: Optional[random.Random] = None,
    prompt_id: Optional[str] = None,
) -> Question:
    """
    Pregunta de opción múltiple para una bandera:
      - 3 nombres incorrectos distintos, muestreados sin reemplazo del pool,
      - se barajan las 4 opciones y se guarda el índice correcto.
    Si el pool no alcanza para 3 incorrectas, la pregunta lleva menos opciones.
    """
    rng = rng or random.Random()
    correct = country.name

    wrong_pool = list(dict.fromkeys(c.name for c in eligible_pool if c.name != correct))
    if not wrong_pool:
        raise InternalError(f"No wrong answers available for {country.code}: eligible pool is too small")
    if len(wrong_pool) < WRONG_CHOICES:
        logger.warning(
            f"⚠️ Solo {len(wrong_pool)} opciones incorrectas disponibles para {country.code}"
        )

    wrong = rng.sample(wrong_pool, k=min(WRONG_CHOICES, len(wrong_pool)))
    choices = [correct, *wrong]
    rng.shuffle(choices)

    return Question(
        prompt_id=prompt_id or country.code,
        image_url=country.flag_image_url,
        choices=choices,
        correct_index=choices.index(correct),
    )


@dataclass
class QuestionSetBuilder:
    tier_table: TierTable
    quickfire_bands: List[Dict[int, int]]
    hardmode_total: int = 195
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def from_settings(cls, config: Settings | None = None, rng: random.Random | None = None) -> "QuestionSetBuilder":
        config = config or default_settings
        return cls(
            tier_table=load_tier_table(config.TIER_TABLE_PATH),
            quickfire_bands=[dict(band) for band in config.QUICKFIRE_BANDS],
            hardmode_total=config.HARDMODE_TOTAL,
            rng=rng or make_rng(config.QUIZ_RANDOM_SEED),
        )

    @property
    def quickfire_total(self) -> int:
        return sum(sum(band.values()) for band in self.quickfire_bands)

    def planned_total(self, mode: str) -> int:
        if mode == HARDMODE:
            return self.hardmode_total
        if mode == QUICKFIRE:
            return self.quickfire_total
        raise QueryValidationError(f"Unknown mode '{mode}'. Supported modes: {', '.join(MODES)}.")

    def select_countries(self, mode: str, eligible: Sequence[Country]) -> List[Country]:
        if mode == HARDMODE:
            countries = list(eligible)
            self.rng.shuffle(countries)
            return countries[: self.hardmode_total]
        if mode == QUICKFIRE:
            return self._select_quickfire(eligible)
        raise QueryValidationError(f"Unknown mode '{mode}'. Supported modes: {', '.join(MODES)}.")

    def _select_quickfire(self, eligible: Sequence[Country]) -> List[Country]:
        # 1) Pools por tier, barajados: tomar los primeros N = muestreo sin reemplazo
        pools = self.tier_table.partition(eligible)
        for tier in TIERS:
            self.rng.shuffle(pools[tier])

        # 2) Cuotas por banda, acumulando lo que falte
        bands: List[List[Country]] = []
        shortfall = 0
        for quotas in self.quickfire_bands:
            band: List[Country] = []
            for tier, quota in quotas.items():
                pool = pools[tier]
                taken = pool[:quota]
                del pool[:quota]
                band.extend(taken)
                shortfall += quota - len(taken)
            bands.append(band)

        # 3) Lo que falte se rellena desde lo no usado (tiers fáciles primero) en la última banda
        if shortfall:
            leftovers = [c for tier in TIERS for c in pools[tier]]
            top_up = leftovers[:shortfall]
            logger.info(f"Quickfire: faltaban {shortfall} países por tier, rellenados {len(top_up)}")
            bands[-1].extend(top_up)

        # 4) Barajar dentro de cada banda, respetando el orden fácil -> difícil
        selected: List[Country] = []
        for band in bands:
            self.rng.shuffle(band)
            selected.extend(band)
        return selected

    def build(self, mode: str, eligible: Sequence[Country]) -> List[Question]:
        selected = self.select_countries(mode, eligible)

        seen: Counter = Counter()
        questions: List[Question] = []
        for country in selected:
            seen[country.code] += 1
            prompt_id = country.code if seen[country.code] == 1 else f"{country.code}-{seen[country.code]}"
            questions.append(build_question(country, eligible, self.rng, prompt_id))
        return questions
