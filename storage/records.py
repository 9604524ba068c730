"""Record types held by the storage backends.

Records are immutable: an update produces a new record that replaces the
stored one. The SQL backend exposes the same attribute names on its
models, so callers can treat both interchangeably.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

ENTRY_TYPES = ('text', 'audio', 'video')

VISIBILITY_PRIVATE = 'private'
VISIBILITY_SCHEDULED = 'scheduled'
VISIBILITY_TYPES = (VISIBILITY_PRIVATE, VISIBILITY_SCHEDULED)

SCHEDULE_PENDING = 'pending'

# Fields a caller may change through update_*; everything else is fixed
# at creation or owned by the schedule coordinator.
ENTRY_MUTABLE_FIELDS = frozenset({'title', 'content', 'media_url', 'category_id', 'media_metadata'})
CONTACT_MUTABLE_FIELDS = frozenset({'name', 'phone_number', 'email'})
SCHEDULE_MUTABLE_FIELDS = frozenset({'contact_id', 'delivery_date', 'reminder_enabled'})


class DeletePolicy(str, enum.Enum):
    """What happens to records that reference a deleted one."""
    TOLERATE = 'tolerate'
    NULLIFY = 'nullify'
    CASCADE = 'cascade'


class ConflictPolicy(str, enum.Enum):
    """How create_schedule treats an entry that already has a schedule."""
    REJECT = 'reject'
    REPLACE = 'replace'


def iso_or_none(value):
    return value.isoformat() if value else None


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password: str
    display_name: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self):
        """Return user data as dictionary, without the password."""
        return {
            'id': self.id,
            'username': self.username,
            'display_name': self.display_name,
            'email': self.email,
        }


@dataclass(frozen=True)
class Category:
    id: int
    user_id: int
    name: str

    def to_dict(self):
        return {'id': self.id, 'user_id': self.user_id, 'name': self.name}


@dataclass(frozen=True)
class Entry:
    id: int
    user_id: int
    title: str
    type: str
    created_at: datetime
    content: Optional[str] = None
    media_url: Optional[str] = None
    visibility: str = VISIBILITY_PRIVATE
    category_id: Optional[int] = None
    media_metadata: Optional[str] = None

    def to_dict(self):
        """Return entry data as dictionary."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'content': self.content,
            'media_url': self.media_url,
            'type': self.type,
            'visibility': self.visibility,
            'category_id': self.category_id,
            'metadata': self.media_metadata,
            'created_at': iso_or_none(self.created_at),
        }


@dataclass(frozen=True)
class Contact:
    id: int
    user_id: int
    name: str
    phone_number: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'phone_number': self.phone_number,
            'email': self.email,
        }


@dataclass(frozen=True)
class Schedule:
    id: int
    entry_id: int
    contact_id: Optional[int]
    delivery_date: datetime
    created_at: datetime
    status: str = SCHEDULE_PENDING
    reminder_enabled: bool = False

    def to_dict(self):
        return {
            'id': self.id,
            'entry_id': self.entry_id,
            'contact_id': self.contact_id,
            'delivery_date': iso_or_none(self.delivery_date),
            'status': self.status,
            'reminder_enabled': self.reminder_enabled,
            'created_at': iso_or_none(self.created_at),
        }


@dataclass(frozen=True)
class ScheduleWithContact:
    """A schedule joined with its recipient, if the contact still exists."""
    schedule: object
    contact: Optional[object] = None

    def __getattr__(self, name):
        if name == 'schedule':
            raise AttributeError(name)
        return getattr(self.schedule, name)

    def to_dict(self):
        data = self.schedule.to_dict()
        data['contact'] = self.contact.to_dict() if self.contact is not None else None
        return data


@dataclass(frozen=True)
class EntryWithSchedule:
    """Read-only join of an entry and its schedule. Never stored."""
    entry: object
    schedule: Optional[ScheduleWithContact] = None

    def __getattr__(self, name):
        if name == 'entry':
            raise AttributeError(name)
        return getattr(self.entry, name)

    def to_dict(self):
        data = self.entry.to_dict()
        data['schedule'] = self.schedule.to_dict() if self.schedule is not None else None
        return data
