# flagquiz/core/config.py
from typing import Dict, List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Metadatos
    PROJECT_NAME: str = "Flag Quiz API"
    PROJECT_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Servidor (run_server.py)
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    RELOAD: bool = False

    # Rate limiting (requests/minuto por IP)
    RATE_LIMIT: str = "60/minute"
    RELOAD_RATE_LIMIT: str = "5/minute"

    # Proveedor externo de países (REST Countries)
    COUNTRIES_API_URL: str = "https://restcountries.com/v3.1/all"
    COUNTRIES_API_FIELDS: str = "name,cca2,unMember"
    COUNTRIES_API_TIMEOUT: float = 10.0
    FLAG_URL_TEMPLATE: str = "https://flagcdn.com/w320/{code}.png"

    # Observadores permanentes de la ONU que también entran en los 195
    OBSERVER_STATES: List[str] = ["Vatican City", "Palestine"]

    # Modos de juego
    HARDMODE_TOTAL: int = 195
    QUICKFIRE_TOTAL: int = 30
    # Bandas en orden de dificultad: cada una mapea tier -> cuota
    QUICKFIRE_BANDS: List[Dict[int, int]] = [{1: 10}, {2: 10}, {3: 10}]
    TIER_TABLE_PATH: Optional[str] = None

    # Cache de países
    LOAD_ON_DEMAND: bool = True
    PRELOAD_COUNTRIES: bool = False

    # Semilla fija solo para pruebas / reproducir una partida
    QUIZ_RANDOM_SEED: Optional[int] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_quickfire_bands(self) -> "Settings":
        if not self.QUICKFIRE_BANDS:
            raise ValueError("QUICKFIRE_BANDS must contain at least one band")
        for band in self.QUICKFIRE_BANDS:
            for tier, quota in band.items():
                if tier not in (1, 2, 3):
                    raise ValueError(f"QUICKFIRE_BANDS: unknown tier {tier}")
                if quota < 0:
                    raise ValueError(f"QUICKFIRE_BANDS: negative quota for tier {tier}")
        planned = sum(sum(band.values()) for band in self.QUICKFIRE_BANDS)
        if planned != self.QUICKFIRE_TOTAL:
            raise ValueError(
                f"QUICKFIRE_BANDS quotas add up to {planned}, expected QUICKFIRE_TOTAL={self.QUICKFIRE_TOTAL}"
            )
        return self


settings = Settings()
