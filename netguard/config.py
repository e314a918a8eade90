"""Settings for netguard: CLI flags over ``NETGUARD_*`` env vars over defaults."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from netguard.pathfinding.dijkstra import RELAX_EPSILON


class NetguardSettings(BaseSettings):
    """Frozen settings object stored on the click context.

    Attributes:
        directed: Treat every edge line as a one-way arc.
        relax_epsilon: Minimum improvement for a Dijkstra relaxation.
        allow_negative_latency: Accept negative or non-finite latencies at
            load time. Weighted queries still refuse negative costs.
        verbose: DEBUG logging for the ``netguard`` logger.
        log_json: JSON log lines instead of the console renderer.
    """

    model_config = SettingsConfigDict(frozen=True, env_prefix="NETGUARD_")

    directed: bool = False
    relax_epsilon: float = Field(default=RELAX_EPSILON, gt=0)
    allow_negative_latency: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> NetguardSettings:
        """Build settings, letting only flags that were actually given override env vars.

        Click passes ``None`` for unset tri-state options and ``False`` for
        absent boolean flags; both fall through to env/defaults.
        """
        overrides = {k: v for k, v in cli_flags.items() if v is not None and v is not False}
        return cls(**overrides)
