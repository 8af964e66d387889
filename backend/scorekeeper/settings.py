"""Score keeper configuration via environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

from scorekeeper.history.archive import HISTORY_KEY


class ScorekeeperSettings(BaseSettings):
    model_config = {"env_prefix": "SCOREKEEPER_"}

    data_dir: str = Field(default="data", min_length=1)
    history_key: str = Field(default=HISTORY_KEY, min_length=1)
    log_dir: str = Field(default="logs/scorekeeper", min_length=1)
