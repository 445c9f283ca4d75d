"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Protocol


@dataclass
class QueueConfig:
    """Queue drain configuration."""
    batch_size: int
    delay_ms: float
    manual_stop: bool
    log_level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_queue_config(self) -> QueueConfig:
        """Get queue configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_queue_config(self) -> QueueConfig:
        """Get queue configuration from environment variables."""
        return QueueConfig(
            batch_size=self._parse_number("FIFOQUEUE_BATCH_SIZE", "1", int),
            delay_ms=self._parse_number("FIFOQUEUE_DELAY_MS", "10", float),
            manual_stop=os.getenv("FIFOQUEUE_MANUAL_STOP", "false").lower() == "true",
            log_level=os.getenv("FIFOQUEUE_LOG_LEVEL", "INFO").upper(),
        )

    @staticmethod
    def _parse_number(name: str, default: str, cast):
        raw = os.getenv(name, default)
        try:
            return cast(raw)
        except ValueError:
            raise ValueError(
                f"{name} environment variable must be a number, got {raw!r}"
            ) from None
