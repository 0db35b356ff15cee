"""Simulated block clock shared by the models of one scenario."""

from dataclasses import dataclass

# Arbitrary post-London starting point (September 2021)
DEFAULT_GENESIS_TIMESTAMP = 1632214844


@dataclass
class Clock:
    """Monotonic block timestamp.

    Models read `latest()` whenever they need the current block time;
    scenarios move time forward with `advance()`.
    """
    timestamp: int = DEFAULT_GENESIS_TIMESTAMP

    def latest(self) -> int:
        return self.timestamp

    def advance(self, seconds: int) -> int:
        """Move time forward and return the new timestamp."""
        if seconds < 0:
            raise ValueError(f"Cannot move time backwards by {seconds}s")
        self.timestamp += seconds
        return self.timestamp

    def advance_to(self, timestamp: int) -> int:
        if timestamp < self.timestamp:
            raise ValueError(
                f"Cannot move time backwards: {timestamp} < {self.timestamp}"
            )
        self.timestamp = timestamp
        return self.timestamp
