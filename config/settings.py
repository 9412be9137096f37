from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Binary Market AMM"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev

    # Market creation: 0.1 unit (1 unit = 10^9 nano)
    MIN_LIQUIDITY_NANO: int = 100_000_000

    # SYNC pays every winner inside Resolve; CLAIM lets each holder withdraw
    PAYOUT_MODE: Literal["SYNC", "CLAIM"] = "SYNC"

    # 0 = unbounded
    MAX_HOLDERS_PER_MARKET: int = 0

    # Registry identity seed and the value it is deployed with
    FACTORY_SALT: str = "factory"
    FACTORY_DEPLOY_VALUE_NANO: int = 50_000_000  # 0.05 unit


settings = Settings()
