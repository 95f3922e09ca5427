from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fxdash.models.rates import CurrencySpec


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR,
    VOLATILITY, REFRESH_INTERVAL_SECONDS, BASE_CURRENCY_TABLE as a JSON list).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Basic app metadata
    app_name: str = "FX Dashboard"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "fxdash.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Rate engine
    volatility: float = Field(2.0, gt=0, description="Max percent move per regeneration")
    refresh_interval_seconds: float = Field(30.0, gt=0)
    enable_scheduler: bool = True
    rng_seed: Optional[int] = None
    # None -> built-in reference table (fxdash.models.constants.BASE_CURRENCY_TABLE)
    base_currency_table: Optional[List[CurrencySpec]] = None

    # Conversion history logging
    enable_conversion_history: bool = True

    @field_validator("base_currency_table")
    @classmethod
    def non_empty_table(cls, v: Optional[List[CurrencySpec]]) -> Optional[List[CurrencySpec]]:
        if v is not None and not v:
            raise ValueError("base_currency_table must not be empty")
        return v

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
