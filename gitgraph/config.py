"""Global configuration: constants, settings, logging."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from pydantic import BaseModel, Field

# Branch every new repository starts on
DEFAULT_BRANCH = "main"

# Author label recorded on every commit
DEFAULT_AUTHOR = "user"

INITIAL_COMMIT_MESSAGE = "Initial commit"

# Name of the repository a fresh application context starts with
DEFAULT_REPOSITORY_NAME = "my-project"

# Diagram geometry
LANE_HEIGHT = 100
X_SPACING = 200

# Lane label for commits no branch walk claimed
UNKNOWN_LANE = "unknown"

# All known environment keys with defaults
_ENV_KEYS: dict[str, dict[str, str]] = {
    "GITGRAPH_LOG_LEVEL": {"default": "INFO", "description": "Logging level"},
    "GITGRAPH_DEFAULT_BRANCH": {"default": DEFAULT_BRANCH, "description": "Initial branch name"},
    "GITGRAPH_AUTHOR": {"default": DEFAULT_AUTHOR, "description": "Commit author label"},
    "GITGRAPH_LANE_HEIGHT": {"default": str(LANE_HEIGHT), "description": "Row spacing in the diagram"},
    "GITGRAPH_X_SPACING": {"default": str(X_SPACING), "description": "Column spacing in the diagram"},
}


class Settings(BaseModel):
    """Runtime settings shared by repositories and the layout engine."""

    log_level: str = "INFO"
    default_branch: str = DEFAULT_BRANCH
    author: str = DEFAULT_AUTHOR
    lane_height: int = Field(default=LANE_HEIGHT, gt=0)
    x_spacing: int = Field(default=X_SPACING, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``GITGRAPH_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values = {key: env.get(key, info["default"]) for key, info in _ENV_KEYS.items()}
        return cls(
            log_level=values["GITGRAPH_LOG_LEVEL"].upper(),
            default_branch=values["GITGRAPH_DEFAULT_BRANCH"],
            author=values["GITGRAPH_AUTHOR"],
            lane_height=int(values["GITGRAPH_LANE_HEIGHT"]),
            x_spacing=int(values["GITGRAPH_X_SPACING"]),
        )


def configure_logging(level: str | int = "INFO") -> None:
    """Attach a basic stream handler to the ``gitgraph`` logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("gitgraph")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
