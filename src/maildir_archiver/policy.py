"""Retention policy - decides which messages are old enough to retire."""

from __future__ import annotations

import time
from dataclasses import dataclass

from .constants import SECONDS_PER_DAY
from .models import MessageDescriptor


@dataclass(frozen=True)
class RetentionPolicy:
    """Cutoff and seen requirement for one run."""

    cutoff_timestamp: int
    require_seen: bool = True

    @classmethod
    def from_age(cls, age_days: int, include_unread: bool = False, now: float | None = None) -> RetentionPolicy:
        """Build the policy for a run retiring messages older than ``age_days``.

        Including unread messages relaxes the seen requirement for the whole run.
        """
        if now is None:
            now = time.time()
        return cls(
            cutoff_timestamp=int(now) - age_days * SECONDS_PER_DAY,
            require_seen=not include_unread,
        )


def should_retire(policy: RetentionPolicy, descriptor: MessageDescriptor) -> bool:
    """Return True when the message qualifies for retirement.

    Old enough (at or before the cutoff), seen unless the policy allows unread
    messages, and never flagged.
    """
    if descriptor.flagged:
        return False
    if policy.require_seen and not descriptor.seen:
        return False
    return descriptor.resolved_timestamp <= policy.cutoff_timestamp
