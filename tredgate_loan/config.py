"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from tredgate_loan.domain.models import PaymentMethod


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Durable key-value store
    database_url: str = "sqlite:///./tredgate_loan.db"
    storage_key: str = "tredgate_loans"

    # Display
    payment_method: PaymentMethod = PaymentMethod.FLAT

    # Service
    service_name: str = "tredgate-loan"
    log_level: str = "INFO"


settings = Settings()
