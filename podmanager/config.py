"""
Runtime settings for pods, read from PODS_* environment variables.
"""
import os
import logging
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes"}


class Settings(BaseModel):
    """Settings shared by the CLI, the HTTP service and the git layer."""
    sources: List[str] = Field(default_factory=list, description="Index URLs listing available pods")
    git_binary: str = Field(default="git", min_length=1)
    git_timeout: int = Field(default=300, ge=1, description="Seconds before a git invocation is abandoned")
    http_timeout: float = Field(default=10.0, gt=0, description="Seconds before an index request is abandoned")
    update_branch: str = Field(default="master", min_length=1, description="Branch checked out when updating a pod")
    log_level: str = "INFO"
    json_logs: bool = False


def parse_sources(value: str) -> List[str]:
    """Split a comma separated list of index URLs."""
    return [source.strip() for source in value.split(",") if source.strip()]


def load_settings() -> Settings:
    """Build settings from the environment."""
    values = {
        "sources": parse_sources(os.getenv("PODS_SOURCES", "")),
        "git_binary": os.getenv("PODS_GIT_BINARY", "git"),
        "update_branch": os.getenv("PODS_UPDATE_BRANCH", "master"),
        "log_level": os.getenv("PODS_LOG_LEVEL", "INFO"),
        "json_logs": os.getenv("PODS_LOG_JSON", "false").lower() in TRUTHY,
    }
    if os.getenv("PODS_GIT_TIMEOUT"):
        values["git_timeout"] = os.environ["PODS_GIT_TIMEOUT"]
    if os.getenv("PODS_HTTP_TIMEOUT"):
        values["http_timeout"] = os.environ["PODS_HTTP_TIMEOUT"]
    return Settings(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    settings = load_settings()
    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings
