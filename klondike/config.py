"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_deal_count() -> int:
    """Parse KLONDIKE_DEAL_COUNT environment variable."""
    return int(os.getenv("KLONDIKE_DEAL_COUNT", "3"))


@dataclass(frozen=True)
class TableConfig:
    """Table rules configuration."""

    deal_count: int = field(default_factory=_parse_deal_count)

    def __post_init__(self) -> None:
        if self.deal_count < 1:
            raise ValueError("Deal count must be at least 1")


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration."""

    debug: bool = field(
        default_factory=lambda: os.getenv("KLONDIKE_DEBUG", "false").lower() == "true"
    )
    table: TableConfig = field(default_factory=TableConfig)


# Global configuration instance
config = EngineConfig()
