from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "TrimFlow"
    BUSINESS_TIMEZONE: str = "Asia/Kuala_Lumpur"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    REQUIRE_DEPOSIT: bool = True
    DEPOSIT_AMOUNT: Decimal = Decimal("10")
    BOOKING_WINDOW_DAYS: int = 14
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    STRIPE_SECRET_KEY: str | None = None
    STRIPE_WEBHOOK_SECRET: str | None = None
    STRIPE_CURRENCY: str = "myr"
    STRIPE_PAYMENT_METHOD_TYPES: list[str] = ["card", "fpx"]

    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None

    OPERATOR_EMAIL: str | None = None
    OPERATOR_PASSWORD: str | None = None


settings = Settings()
