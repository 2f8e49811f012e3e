"""Feed polling loop."""

from .poller import PollCycle, PollScheduler, PollState

__all__ = ["PollCycle", "PollScheduler", "PollState"]
