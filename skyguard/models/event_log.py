"""
Event log model - append-only record of dashboard events.

The dashboard posts free-form events (user actions, uploads, notes).
Rows are inserted and listed, never updated.
"""

import secrets
import string
import time
from typing import Any, Dict, List, Optional

from sqlalchemy import BigInteger, JSON, String, select
from sqlalchemy.orm import Mapped, mapped_column

from skyguard.models.base import Base, SessionLocal, get_session

_ID_ALPHABET = string.ascii_letters + string.digits + '_-'

# Newest entries returned by a listing
MAX_LISTED_EVENTS = 200


def generate_id(size: int) -> str:
    """Random URL-safe identifier of the given length."""
    return ''.join(secrets.choice(_ID_ALPHABET) for _ in range(size))


class EventLogEntry(Base):
    """
    One logged dashboard event.

    Fields:
        id: 8-character random identifier
        t: creation time, epoch milliseconds
        type: event category (defaults to 'event')
        payload: event body
        meta: client-supplied context
    """

    __tablename__ = 'event_log'

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    t: Mapped[int] = mapped_column(BigInteger, index=True)
    type: Mapped[str] = mapped_column(String(64), default='event')
    payload: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    meta: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            't': self.t,
            'type': self.type,
            'payload': self.payload,
            'meta': self.meta,
        }


def append_event(
    event_type: Optional[str] = None,
    payload: Optional[Any] = None,
    meta: Optional[Any] = None,
) -> EventLogEntry:
    """Insert a new event and return it."""
    entry = EventLogEntry(
        id=generate_id(8),
        t=int(time.time() * 1000),
        type=event_type or 'event',
        payload=payload or {},
        meta=meta or {},
    )
    with get_session() as session:
        session.add(entry)
    return entry


def list_recent_events(limit: int = MAX_LISTED_EVENTS) -> List[EventLogEntry]:
    """Newest events first."""
    with SessionLocal() as session:
        stmt = select(EventLogEntry).order_by(EventLogEntry.t.desc()).limit(limit)
        return list(session.scalars(stmt))
