from pydantic_settings import BaseSettings, SettingsConfigDict


class LookupSettings(BaseSettings):
    """Lookupable configuration"""

    # Database Settings
    database_url: str = "sqlite:///./data/lookupable.db"
    echo_sql: bool = False  # Set to True for SQL debug logging

    # Lookup Settings
    default_lookup_column: str = "identifier"

    model_config = SettingsConfigDict(
        env_prefix="LOOKUPABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = LookupSettings()
