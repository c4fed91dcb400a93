from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from printflow.domain.workflow.value_objects.enums import StagePolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PRINTFLOW_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Workflow policy
    STAGE_POLICY: StagePolicy = StagePolicy.FULL

    # Analytics thresholds (whole days)
    AT_RISK_THRESHOLD_DAYS: int = 1
    DEADLINE_ALERT_WINDOW_DAYS: int = 3
    RECENT_ACTIVITY_LIMIT: int = 20

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"


settings = Settings()  # type: ignore
