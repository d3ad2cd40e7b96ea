from functools import lru_cache
import os
from pydantic import BaseModel, Field


class Settings(BaseModel):
    env: str = Field(default="dev", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(default="", alias="DATABASE_URL")
    postgres_db: str = Field(default="skimatch", alias="POSTGRES_DB")
    postgres_user: str = Field(default="skimatch", alias="POSTGRES_USER")
    postgres_password: str = Field(default="skimatch", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    conflict_same_skill_only: bool = Field(default=False, alias="CONFLICT_SAME_SKILL_ONLY")
    check_singles_for_rules: bool = Field(default=False, alias="CHECK_SINGLES_FOR_RULES")

    default_recurrence_months: int = Field(default=3, alias="DEFAULT_RECURRENCE_MONTHS")
    max_recurrence_months: int = Field(default=12, alias="MAX_RECURRENCE_MONTHS")

    time_options_start_hour: int = Field(default=6, alias="TIME_OPTIONS_START_HOUR")
    time_options_end_hour: int = Field(default=22, alias="TIME_OPTIONS_END_HOUR")
    time_options_step_minutes: int = Field(default=30, alias="TIME_OPTIONS_STEP_MINUTES")

    class Config:
        populate_by_name = True

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(**os.environ)
