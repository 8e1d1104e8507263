import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_LOG_LEVEL = "EXPENSE_TRACKER_LOG_LEVEL"
ENV_DATE_FORMAT = "EXPENSE_TRACKER_DATE_FORMAT"


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    date_format: str = "%Y-%m-%d"   # dashboard display only; input is always YYYY-MM-DD


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    defaults = Settings()
    return Settings(
        log_level=env.get(ENV_LOG_LEVEL) or defaults.log_level,
        date_format=env.get(ENV_DATE_FORMAT) or defaults.date_format,
    )
