from decouple import config
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = config("ENV", default="PROD").upper()

    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO").upper()

    # Prefix for money amounts rendered in reasons
    CURRENCY_SYMBOL: str = config("CURRENCY_SYMBOL", default="₦")

    API_VERSION: str = config("API_VERSION", default="v1.0")

    model_config = SettingsConfigDict(case_sensitive=True)


settings = Settings()
