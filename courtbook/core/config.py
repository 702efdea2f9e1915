from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"

    MIN_BOOKING_MINUTES: int = 60
    BILLING_GRANULARITY_MINUTES: int = 30
    SLOT_GRANULARITY_MINUTES: int = 60

    STORE_PROVIDER: str = "memory"
    DATA_DIR: str = "./data/bookings"
    RESOURCE_CATALOG_PATH: str | None = None
    DISCOUNT_CODES_PATH: str | None = None

    NOTIFIER_WEBHOOK_URL: str | None = None
    NOTIFIER_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
