# flagquiz/infra/countries/restcountries.py
import logging
from typing import Any, Iterable, List, Optional

import requests

from flagquiz.core.config import Settings, settings as default_settings
from flagquiz.core.errors import FetchError
from flagquiz.domain.entities.country import Country

logger = logging.getLogger(__name__)


def flag_url_from_code(code: str, template: str | None = None) -> str:
    return (template or default_settings.FLAG_URL_TEMPLATE).format(code=code.lower())


def normalize_record(
    record: Any,
    observer_states: Iterable[str],
    flag_url_template: str | None = None,
) -> Optional[Country]:
    """
    Convierte un registro de REST Countries en Country.
    Devuelve None si falta nombre, código o no se puede construir la URL de la bandera.
    """
    if not isinstance(record, dict):
        return None

    name_obj = record.get("name")
    name = name_obj.get("common") if isinstance(name_obj, dict) else None
    code = record.get("cca2")
    if not isinstance(name, str) or not name.strip():
        return None
    if not isinstance(code, str) or not code.strip():
        return None

    name = name.strip()
    code = code.strip().upper()
    try:
        flag_url = flag_url_from_code(code, flag_url_template)
    except (KeyError, IndexError, ValueError):
        return None
    if not flag_url:
        return None

    is_eligible = record.get("unMember") is True or name in set(observer_states)
    return Country(name=name, code=code, flag_image_url=flag_url, is_eligible=is_eligible)


def filter_eligible(records: Iterable[Any], config: Settings | None = None) -> List[Country]:
    """Normaliza, filtra a los 195 (ONU + observadores) y deduplica por código."""
    config = config or default_settings
    seen = set()
    countries: List[Country] = []

    for record in records:
        country = normalize_record(record, config.OBSERVER_STATES, config.FLAG_URL_TEMPLATE)
        if country is None:
            logger.debug(f"Registro descartado (incompleto): {record!r:.80}")
            continue
        if not country.is_eligible or country.code in seen:
            continue
        seen.add(country.code)
        countries.append(country)

    return countries


class RestCountriesSource:
    """Fuente de datos de países basada en la API pública de REST Countries."""

    def __init__(self, config: Settings | None = None, session: requests.Session | None = None):
        self.config = config or default_settings
        self._session = session or requests.Session()

    def fetch_eligible_countries(self) -> List[Country]:
        url = self.config.COUNTRIES_API_URL
        params = {"fields": self.config.COUNTRIES_API_FIELDS}

        try:
            logger.info(f"🔄 Descargando países desde {url}...")
            r = self._session.get(url, params=params, timeout=self.config.COUNTRIES_API_TIMEOUT)
            r.raise_for_status()
            data = r.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise FetchError(f"REST Countries fetch failed: {status}") from e
        except requests.RequestException as e:
            raise FetchError(f"REST Countries fetch failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"REST Countries returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise FetchError("REST Countries returned an unexpected payload (expected a list)")

        countries = filter_eligible(data, self.config)
        logger.info(f"📈 Países recibidos: {len(data)}, elegibles: {len(countries)}")
        if len(countries) != 195:
            logger.warning(f"⚠️ Se esperaban 195 países elegibles, se obtuvieron {len(countries)}")
        return countries

    def close(self) -> None:
        self._session.close()


def fetch_eligible_countries(config: Settings | None = None) -> List[Country]:
    source = RestCountriesSource(config)
    try:
        return source.fetch_eligible_countries()
    finally:
        source.close()
