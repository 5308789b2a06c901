"""Reliability primitives."""

from dockside_installer.core.reliability.polling import PollResult, poll_until

__all__ = ["PollResult", "poll_until"]
