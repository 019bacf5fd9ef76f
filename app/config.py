"""Settings for the catalog API and the client tools.

Every value can be overridden from the environment with the ``SHOP_`` prefix
(``SHOP_DATA_PATH``, ``SHOP_ID_STRATEGY`` ...) or from a local ``.env`` file.
"""
from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application configuration."""

    data_path: Path = BASE_DIR / "data.json"
    # "length" reuses ids after a delete; "max" never does
    id_strategy: Literal["length", "max"] = "length"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    port: int = 3000

    api_base_url: str = "http://127.0.0.1:3000"
    cart_storage_path: Path = Path(".local_storage.json")

    model_config = SettingsConfigDict(
        env_prefix="SHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def get_settings() -> Settings:
    return settings
