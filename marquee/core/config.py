from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Marquee Booking API"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changeme"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8

    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "12345"
    POSTGRES_DB: str = "marquee_db"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Booking rules
    CURRENCY: str = "INR"
    CURRENCY_SYMBOL: str = "₹"
    MAX_TICKETS_PER_BOOKING: int = 6

    # Payment collaborator (simulated gateway)
    PAYMENT_SIMULATED_OUTCOME: str = "success"  # success | failure | timeout
    PAYMENT_DELAY_SECONDS: float = 0.0
    PAYMENT_CLAIM_TIMEOUT_SECONDS: int = 120

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
