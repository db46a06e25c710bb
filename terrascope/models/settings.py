# terrascope/models/settings.py

from pydantic_settings import BaseSettings


class GraphSettings(BaseSettings):
    """
    Pydantic settings for graph output.
    By default, these fields map to environment variables prefixed with `TERRASCOPE_`.
    For example, `TERRASCOPE_PRETTY=true`, `TERRASCOPE_LOG_LEVEL=DEBUG`.
    """

    pretty: bool = False
    include_stats: bool = False
    prune_dangling: bool = False
    log_level: str = "WARNING"

    class Config:
        env_prefix = "TERRASCOPE_"
