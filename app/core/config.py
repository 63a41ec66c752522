from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_NAME: str = "Tiny Milestone API"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./tiny_milestone.db"

    # Persisted keys, kept compatible with the browser build's localStorage names
    HISTORY_KEY: str = "tiny-milestone-completed"
    SESSION_LOG_KEY: str = "tiny-milestone-history"
    HISTORY_LIMIT: int = 5
    SESSION_LOG_LIMIT: int = 50

    REROLL_BUDGET: int = 2
    SESSION_TTL_MINUTES: int = 60

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

settings = Settings()
