"""
Admin notification counts.

Counts are derived from three independent collections and never stored. The
aggregator memoizes the last result and only recomputes when the fields that feed
the counts actually change.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationCounts:
    unread_messages: int = 0
    pending_testimonials: int = 0
    pending_quote_requests: int = 0

    @property
    def total(self) -> int:
        return self.unread_messages + self.pending_testimonials + self.pending_quote_requests

    def as_dict(self) -> dict:
        return {
            "unread_messages": self.unread_messages,
            "pending_testimonials": self.pending_testimonials,
            "pending_quote_requests": self.pending_quote_requests,
            "total": self.total,
        }


def _field(item: Any, name: str, default: Any = None) -> Any:
    #accept both records and plain JSON dicts
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def _is_pending_quote(quote: Any) -> bool:
    return _field(quote, "status") == "pending" and not _field(quote, "reviewed", False)


def compute_notification_counts(
    messages: Optional[Iterable[Any]],
    pending_testimonials: Optional[Iterable[Any]],
    quote_requests: Optional[Iterable[Any]],
) -> NotificationCounts:
    return NotificationCounts(
        unread_messages=sum(1 for m in (messages or []) if not _field(m, "read", False)),
        pending_testimonials=sum(1 for _ in (pending_testimonials or [])),
        pending_quote_requests=sum(1 for q in (quote_requests or []) if _is_pending_quote(q)),
    )


Fingerprint = Tuple[tuple, tuple, tuple]


class NotificationAggregator:
    def __init__(self):
        self._fingerprint: Optional[Fingerprint] = None
        self._counts = NotificationCounts()
        self._stats = {"calls": 0, "recomputes": 0}

    @staticmethod
    def _fingerprint_of(messages: Sequence[Any], testimonials: Sequence[Any], quotes: Sequence[Any]) -> Fingerprint:
        return (
            tuple((_field(m, "id"), bool(_field(m, "read", False))) for m in messages),
            tuple(_field(t, "id") for t in testimonials),
            tuple((_field(q, "id"), _field(q, "status"), bool(_field(q, "reviewed", False))) for q in quotes),
        )

    def counts(
        self,
        messages: Optional[Iterable[Any]] = None,
        pending_testimonials: Optional[Iterable[Any]] = None,
        quote_requests: Optional[Iterable[Any]] = None,
    ) -> NotificationCounts:
        messages = list(messages or [])
        pending_testimonials = list(pending_testimonials or [])
        quote_requests = list(quote_requests or [])

        self._stats["calls"] += 1
        fingerprint = self._fingerprint_of(messages, pending_testimonials, quote_requests)
        if fingerprint == self._fingerprint:
            return self._counts

        self._counts = compute_notification_counts(messages, pending_testimonials, quote_requests)
        self._fingerprint = fingerprint
        self._stats["recomputes"] += 1
        logger.debug(f"Recomputed notification counts: {self._counts.as_dict()}")
        return self._counts

    @property
    def recompute_count(self) -> int:
        return self._stats["recomputes"]

    def get_stats(self) -> dict:
        return dict(self._stats)
