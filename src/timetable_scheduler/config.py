"""Configuration for the scheduling algorithm."""

from dataclasses import dataclass

from .constants import DEFAULT_MAX_ITERATIONS, DEFAULT_TIMEOUT_MILLIS
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class SchedulerConfig:
    """Search budgets and validation switches.

    Attributes:
        treat_soft_as_hard: Reject candidates that violate soft constraints
        timeout_millis: Wall-clock budget for one scheduling run
        seed: Recorded for reproducible runs. The search is deterministic and
            does not consume it.
        max_iterations: Maximum number of recursive search calls
        enforce_max_load: Enforce each professor's maximum course load
    """

    treat_soft_as_hard: bool = False
    timeout_millis: int = DEFAULT_TIMEOUT_MILLIS
    seed: int | None = None
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    enforce_max_load: bool = False

    def __post_init__(self) -> None:
        if self.timeout_millis < 0:
            raise ConfigurationError(
                f"timeout_millis cannot be negative, got {self.timeout_millis}"
            )
        if self.max_iterations < 0:
            raise ConfigurationError(
                f"max_iterations cannot be negative, got {self.max_iterations}"
            )


_DURATION_UNITS = {"s": 1, "m": 60, "h": 3600}


def parse_timeout(value: str) -> int:
    """Parse a timeout such as '10s', '5m', '1h' or '120' into milliseconds.

    A bare number is read as seconds.

    Raises:
        ConfigurationError: If the value is not a non-negative duration
    """
    text = value.strip().lower()
    multiplier = 1
    if text and text[-1] in _DURATION_UNITS:
        multiplier = _DURATION_UNITS[text[-1]]
        text = text[:-1]

    try:
        seconds = int(text)
    except ValueError:
        raise ConfigurationError(
            f"Invalid timeout: '{value}' (expected e.g. 10s, 5m, 1h or seconds)"
        ) from None

    if seconds < 0:
        raise ConfigurationError(f"Timeout cannot be negative, got '{value}'")
    return seconds * multiplier * 1000
