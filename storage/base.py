"""Storage contract shared by the in-memory and SQL backends.

The base class owns every rule that spans more than one record: schedule
coordination (entry visibility), cascades, delete policies and the
entry/schedule/contact join. Backends only provide row primitives and a
transaction scope; each public operation runs inside one transaction.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import wraps
from typing import List, Optional

from .errors import DuplicateUsernameError, ImmutableFieldError, ScheduleConflictError
from .records import (
    CONTACT_MUTABLE_FIELDS,
    ENTRY_MUTABLE_FIELDS,
    SCHEDULE_MUTABLE_FIELDS,
    SCHEDULE_PENDING,
    VISIBILITY_PRIVATE,
    VISIBILITY_SCHEDULED,
    ConflictPolicy,
    DeletePolicy,
    EntryWithSchedule,
    ScheduleWithContact,
)

logger = logging.getLogger(__name__)

USER = 'user'
CATEGORY = 'category'
ENTRY = 'entry'
CONTACT = 'contact'
SCHEDULE = 'schedule'
KINDS = (USER, CATEGORY, ENTRY, CONTACT, SCHEDULE)


def utcnow():
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def transactional(method):
    """Run a storage operation inside the backend's transaction scope."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._transaction():
            return method(self, *args, **kwargs)
    return wrapper


def _check_patch(entity, changes, allowed):
    rejected = set(changes) - allowed
    if rejected:
        raise ImmutableFieldError(entity, rejected)


class Storage(ABC):
    """Entity store for users, categories, entries, contacts and schedules."""

    def __init__(self, schedule_conflict=ConflictPolicy.REJECT,
                 category_delete=DeletePolicy.TOLERATE,
                 contact_delete=DeletePolicy.TOLERATE):
        self.schedule_conflict = ConflictPolicy(schedule_conflict)
        self.category_delete = DeletePolicy(category_delete)
        self.contact_delete = DeletePolicy(contact_delete)

    # --- backend primitives -------------------------------------------------

    @abstractmethod
    def _transaction(self):
        """Context manager making the enclosed calls atomic. Must be re-entrant."""

    @abstractmethod
    def _insert(self, kind, values):
        """Store a new record with the next id of its kind and return it."""

    @abstractmethod
    def _get(self, kind, record_id):
        """Return the record or None."""

    @abstractmethod
    def _filter(self, kind, **criteria) -> list:
        """Return records whose fields equal *criteria*, in id order."""

    @abstractmethod
    def _patch(self, kind, record_id, values):
        """Overwrite *values* on the record; return it, or None if absent."""

    @abstractmethod
    def _remove(self, kind, record_id) -> bool:
        """Delete the record; return whether it existed."""

    # --- users --------------------------------------------------------------

    @transactional
    def get_user(self, user_id):
        return self._get(USER, user_id)

    @transactional
    def get_user_by_username(self, username):
        matches = self._filter(USER, username=username)
        return matches[0] if matches else None

    @transactional
    def create_user(self, username, password, display_name=None, email=None):
        if self.get_user_by_username(username) is not None:
            raise DuplicateUsernameError(username)
        return self._insert(USER, {
            'username': username,
            'password': password,
            'display_name': display_name,
            'email': email,
        })

    # --- categories ---------------------------------------------------------

    @transactional
    def get_categories(self, user_id) -> list:
        return self._filter(CATEGORY, user_id=user_id)

    @transactional
    def get_category(self, category_id):
        return self._get(CATEGORY, category_id)

    @transactional
    def create_category(self, user_id, name):
        return self._insert(CATEGORY, {'user_id': user_id, 'name': name})

    @transactional
    def delete_category(self, category_id) -> bool:
        if self._get(CATEGORY, category_id) is None:
            return False
        dependents = self._filter(ENTRY, category_id=category_id)
        if self.category_delete is DeletePolicy.NULLIFY:
            for entry in dependents:
                self._patch(ENTRY, entry.id, {'category_id': None})
        elif self.category_delete is DeletePolicy.CASCADE:
            for entry in dependents:
                self.delete_entry(entry.id)
        return self._remove(CATEGORY, category_id)

    # --- entries ------------------------------------------------------------

    @transactional
    def get_entries(self, user_id) -> list:
        return self._filter(ENTRY, user_id=user_id)

    @transactional
    def get_entry(self, entry_id):
        return self._get(ENTRY, entry_id)

    @transactional
    def get_entries_by_type(self, user_id, entry_type) -> list:
        return self._filter(ENTRY, user_id=user_id, type=entry_type)

    @transactional
    def get_entries_by_category(self, user_id, category_id) -> list:
        return self._filter(ENTRY, user_id=user_id, category_id=category_id)

    @transactional
    def create_entry(self, user_id, title, type, content=None, media_url=None,
                     category_id=None, media_metadata=None):
        return self._insert(ENTRY, {
            'user_id': user_id,
            'title': title,
            'type': type,
            'content': content,
            'media_url': media_url,
            'visibility': VISIBILITY_PRIVATE,
            'category_id': category_id,
            'media_metadata': media_metadata,
            'created_at': utcnow(),
        })

    @transactional
    def update_entry(self, entry_id, **changes):
        _check_patch(ENTRY, changes, ENTRY_MUTABLE_FIELDS)
        return self._patch(ENTRY, entry_id, changes)

    @transactional
    def delete_entry(self, entry_id) -> bool:
        for schedule in self._filter(SCHEDULE, entry_id=entry_id):
            self._remove(SCHEDULE, schedule.id)
            logger.info('Removed schedule %s with entry %s', schedule.id, entry_id)
        return self._remove(ENTRY, entry_id)

    # --- contacts -----------------------------------------------------------

    @transactional
    def get_contacts(self, user_id) -> list:
        return self._filter(CONTACT, user_id=user_id)

    @transactional
    def get_contact(self, contact_id):
        return self._get(CONTACT, contact_id)

    @transactional
    def create_contact(self, user_id, name, phone_number=None, email=None):
        return self._insert(CONTACT, {
            'user_id': user_id,
            'name': name,
            'phone_number': phone_number,
            'email': email,
        })

    @transactional
    def update_contact(self, contact_id, **changes):
        _check_patch(CONTACT, changes, CONTACT_MUTABLE_FIELDS)
        return self._patch(CONTACT, contact_id, changes)

    @transactional
    def delete_contact(self, contact_id) -> bool:
        if self._get(CONTACT, contact_id) is None:
            return False
        dependents = self._filter(SCHEDULE, contact_id=contact_id)
        if self.contact_delete is DeletePolicy.NULLIFY:
            for schedule in dependents:
                self._patch(SCHEDULE, schedule.id, {'contact_id': None})
        elif self.contact_delete is DeletePolicy.CASCADE:
            for schedule in dependents:
                self.delete_schedule(schedule.id)
        return self._remove(CONTACT, contact_id)

    # --- schedules ----------------------------------------------------------

    @transactional
    def get_schedules(self, user_id) -> list:
        entry_ids = {entry.id for entry in self.get_entries(user_id)}
        return [s for s in self._filter(SCHEDULE) if s.entry_id in entry_ids]

    @transactional
    def get_schedule(self, schedule_id):
        return self._get(SCHEDULE, schedule_id)

    @transactional
    def get_schedule_by_entry_id(self, entry_id):
        """Return the entry's schedule, or the oldest one if several exist."""
        matches = self._filter(SCHEDULE, entry_id=entry_id)
        return matches[0] if matches else None

    @transactional
    def create_schedule(self, entry_id, contact_id, delivery_date, reminder_enabled=False):
        existing = self.get_schedule_by_entry_id(entry_id)
        if existing is not None:
            if self.schedule_conflict is ConflictPolicy.REJECT:
                raise ScheduleConflictError(entry_id, existing.id)
            self.delete_schedule(existing.id)

        schedule = self._insert(SCHEDULE, {
            'entry_id': entry_id,
            'contact_id': contact_id,
            'delivery_date': delivery_date,
            'status': SCHEDULE_PENDING,
            'reminder_enabled': reminder_enabled,
            'created_at': utcnow(),
        })

        if self._patch(ENTRY, entry_id, {'visibility': VISIBILITY_SCHEDULED}) is None:
            logger.warning('Schedule %s refers to missing entry %s', schedule.id, entry_id)
        return schedule

    @transactional
    def update_schedule(self, schedule_id, **changes):
        _check_patch(SCHEDULE, changes, SCHEDULE_MUTABLE_FIELDS)
        return self._patch(SCHEDULE, schedule_id, changes)

    @transactional
    def delete_schedule(self, schedule_id) -> bool:
        schedule = self._get(SCHEDULE, schedule_id)
        if schedule is None:
            return False
        entry_id = schedule.entry_id
        removed = self._remove(SCHEDULE, schedule_id)
        self._patch(ENTRY, entry_id, {'visibility': VISIBILITY_PRIVATE})
        return removed

    # --- combined queries ---------------------------------------------------

    @transactional
    def get_entries_with_schedules(self, user_id) -> List[EntryWithSchedule]:
        views = []
        for entry in self.get_entries(user_id):
            schedule = self.get_schedule_by_entry_id(entry.id)
            joined: Optional[ScheduleWithContact] = None
            if schedule is not None:
                contact = None
                if schedule.contact_id is not None:
                    contact = self.get_contact(schedule.contact_id)
                joined = ScheduleWithContact(schedule, contact)
            views.append(EntryWithSchedule(entry, joined))
        return views

    @transactional
    def get_scheduled_entries(self, user_id) -> List[EntryWithSchedule]:
        return [view for view in self.get_entries_with_schedules(user_id)
                if view.schedule is not None]
