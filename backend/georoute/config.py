from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


GRAPH_DIRS_ENV = "GEOROUTE_GRAPH_DIRS"
SEED_ENV = "GEOROUTE_SEED"


class Settings(BaseModel):
    # Each directory holds edges.csv (and optionally nodes.csv) for one backend.
    # Empty list => built-in regional graphs.
    graph_csv_dirs: List[Path] = Field(default_factory=list)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    activity_log_size: int = Field(default=50, ge=1)
    seed: Optional[int] = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Build settings from the environment.

    GEOROUTE_GRAPH_DIRS: os.pathsep-separated backend directories, in backend order.
    GEOROUTE_SEED: integer seed for the dispatcher's random draws.
    """
    overrides = {}
    graph_dirs = os.environ.get(GRAPH_DIRS_ENV, "")
    if graph_dirs.strip():
        overrides["graph_csv_dirs"] = [Path(p) for p in graph_dirs.split(os.pathsep) if p.strip()]
    seed = os.environ.get(SEED_ENV, "")
    if seed.strip():
        overrides["seed"] = seed.strip()
    return Settings(**overrides)


class RouteOptions(BaseModel):
    """Simulation knobs applied to a single request."""

    # ==========================================================================
    # Latency simulation
    # ==========================================================================
    # delay = latency_ms + uniform(0, 1) * jitter_ms, applied to every outcome
    latency_ms: float = Field(
        default=500.0,
        ge=0.0,
        description="Base artificial delay before a backend answers (ms).",
    )
    jitter_ms: float = Field(
        default=300.0,
        ge=0.0,
        description="Upper bound of the random delay added on top of latency_ms (ms).",
    )

    # ==========================================================================
    # Failure simulation
    # ==========================================================================
    # A request fails when a uniform draw in [0, 1) is below failure_rate.
    # 0.0 never fails, 1.0 always fails.
    failure_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Probability that the selected backend never responds.",
    )


# Process-wide defaults used when a request carries no options
_config = RouteOptions()


def get_config() -> RouteOptions:
    """Get current default route options."""
    return _config


def update_config(**kwargs) -> RouteOptions:
    """Update default route options. Unknown keys are ignored by pydantic."""
    global _config
    _config = RouteOptions(**{**_config.model_dump(), **kwargs})
    return _config


def reset_config() -> RouteOptions:
    """Reset default route options."""
    global _config
    _config = RouteOptions()
    return _config
