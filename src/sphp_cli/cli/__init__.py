"""CLI helpers exposed for other modules."""

from .ui import ConsoleReporter, StepTracker, select_with_arrows

__all__ = ["ConsoleReporter", "StepTracker", "select_with_arrows"]
