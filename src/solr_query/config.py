"""Configuration settings for solr-query."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Deepest nesting of untrusted input the validator will walk.
    SOLR_QUERY_MAX_DEPTH: int = 256
    SOLR_QUERY_LOG_LEVEL: str = "WARNING"

    @property
    def log_level(self) -> str:
        return self.SOLR_QUERY_LOG_LEVEL.upper()


settings = Settings()
