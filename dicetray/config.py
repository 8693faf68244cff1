from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    environment: str = "local"
    debug: bool = True
    session_secret_key: str = "dev-secret-change-me"

    # Roll history is kept per browser session, in memory only.
    history_capacity: int = 20
    # Matches the two-digit width of the dice count input.
    max_dice_count: int = 99
    # Seed the random source for reproducible rolls; leave unset in production.
    random_seed: int | None = None
    # Start every new table with a single "Roll 1" line.
    initial_line: bool = True


settings = Settings()
