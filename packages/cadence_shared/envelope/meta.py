"""Envelope metadata primitives shared across Cadence services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4


class EnvelopeKind(str, Enum):
    """Envelope kinds used for intent classification."""

    UNSPECIFIED = "unspecified"
    COMMAND = "command"
    QUERY = "query"
    RESULT = "result"


@dataclass(frozen=True)
class EnvelopeMeta:
    """Canonical metadata attached to every envelope result."""

    envelope_id: str
    trace_id: str
    parent_id: str
    timestamp: datetime
    kind: EnvelopeKind
    source: str
    principal: str


def new_meta(
    *,
    kind: EnvelopeKind,
    source: str,
    principal: str,
    trace_id: str | None = None,
    parent_id: str = "",
    envelope_id: str | None = None,
    timestamp: datetime | None = None,
) -> EnvelopeMeta:
    """Build ``EnvelopeMeta`` with safe defaults for IDs and timestamp."""
    return EnvelopeMeta(
        envelope_id=envelope_id or uuid4().hex,
        trace_id=trace_id or uuid4().hex,
        parent_id=parent_id,
        timestamp=datetime.now(UTC) if timestamp is None else _normalize_utc(timestamp),
        kind=kind,
        source=source,
        principal=principal,
    )


def _normalize_utc(value: datetime) -> datetime:
    """Normalize naive/aware datetimes to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
