from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    DATABASE_URL: str = "sqlite:///training_actions.db"
    DATABASE_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # What to do when credited attendance exceeds the session duration:
    # "allow" stores silently, "warn" stores and logs, "reject" refuses.
    ATTENDANCE_OVER_DURATION: str = "warn"

    # Only used by `python -m training_actions.seed` to create the rate record.
    DEFAULT_TEACHER_HOUR_RATE: float = 0.0
    DEFAULT_STUDENT_HOUR_RATE: float = 0.0


settings = Settings()
