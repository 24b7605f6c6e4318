from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./goals.db"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Fixed key the whole goal collection is stored under.
    GOALS_STORAGE_KEY: str = "goals"

    # Create missing tables at startup. Turn off when Alembic owns the schema.
    AUTO_CREATE_TABLES: bool = True

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://goals.example.com,http://localhost:3000"
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
