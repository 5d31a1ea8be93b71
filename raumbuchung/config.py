from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    # Database
    database_url: str = "sqlite:///./raumbuchung.db"

    # App
    app_name: str = 'Raumbuchung Private Dining'
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Öffnungszeiten werden in UTC gespeichert, Eingabe/Ausgabe in dieser Zone
    local_timezone: str = "Europe/Berlin"

    # Reservierungen
    enforce_future_start: bool = True
    max_retry_attempts: int = 3
    retry_base_delay_ms: int = 50

    # Logging
    log_dir: str = "logs"
    log_file_max_bytes: int = 10_000_000
    log_backup_count: int = 5


settings = Settings()
