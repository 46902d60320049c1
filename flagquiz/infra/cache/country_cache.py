# flagquiz/infra/cache/country_cache.py
import logging
from datetime import datetime, timezone
from typing import List, Optional, Protocol

from flagquiz.core.errors import FetchError, NotReadyError
from flagquiz.domain.entities.country import Country

logger = logging.getLogger(__name__)


class CountrySource(Protocol):
    def fetch_eligible_countries(self) -> List[Country]: ...


class CountryCache:
    """
    Cache en memoria (vida del proceso) de los países elegibles.

    - reload() reemplaza todo o nada: si la descarga falla, se conserva lo anterior.
    - get() carga bajo demanda si está vacía y load_on_demand=True;
      si no, lanza NotReadyError en lugar de devolver una lista vacía.
    """

    def __init__(self, source: CountrySource, *, load_on_demand: bool = True):
        self._source = source
        self.load_on_demand = load_on_demand
        self._countries: List[Country] = []
        self.loaded_at: Optional[datetime] = None
        self.last_error: Optional[str] = None

    def ready(self) -> bool:
        return bool(self._countries)

    def reload(self) -> List[Country]:
        try:
            countries = list(self._source.fetch_eligible_countries())
        except FetchError as e:
            self.last_error = e.message
            logger.error(f"❌ Error recargando países: {e.message}")
            raise

        if not countries:
            self.last_error = "Country provider returned no eligible countries"
            logger.error("❌ El proveedor no devolvió países elegibles; se mantiene la cache anterior")
            raise FetchError(self.last_error)

        self._countries = countries
        self.loaded_at = datetime.now(timezone.utc)
        self.last_error = None
        logger.info(f"✅ Cache de países cargada: {len(countries)} países")
        return list(countries)

    def ensure_loaded(self) -> List[Country]:
        if self.ready():
            return list(self._countries)
        if not self.load_on_demand:
            raise NotReadyError("Country data is not loaded yet. Try again shortly.")
        return self.reload()

    def get(self) -> List[Country]:
        return self.ensure_loaded()

    def __len__(self) -> int:
        return len(self._countries)
