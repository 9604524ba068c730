import itertools
import threading
from dataclasses import replace

from .base import CATEGORY, CONTACT, ENTRY, KINDS, SCHEDULE, USER, Storage
from .records import Category, Contact, Entry, Schedule, User

RECORD_TYPES = {
    USER: User,
    CATEGORY: Category,
    ENTRY: Entry,
    CONTACT: Contact,
    SCHEDULE: Schedule,
}


class MemStorage(Storage):
    """Volatile store backed by insertion-ordered dicts.

    Every public operation holds one re-entrant lock, so operations never
    interleave even when the app runs on a threaded server.
    """

    def __init__(self, **policies):
        super().__init__(**policies)
        self._lock = threading.RLock()
        self._tables = {kind: {} for kind in KINDS}
        self._ids = {kind: itertools.count(1) for kind in KINDS}

    def _transaction(self):
        return self._lock

    def _insert(self, kind, values):
        record = RECORD_TYPES[kind](id=next(self._ids[kind]), **values)
        self._tables[kind][record.id] = record
        return record

    def _get(self, kind, record_id):
        return self._tables[kind].get(record_id)

    def _filter(self, kind, **criteria):
        return [
            record for record in self._tables[kind].values()
            if all(getattr(record, field) == value for field, value in criteria.items())
        ]

    def _patch(self, kind, record_id, values):
        record = self._tables[kind].get(record_id)
        if record is None:
            return None
        record = replace(record, **values)
        self._tables[kind][record_id] = record
        return record

    def _remove(self, kind, record_id):
        return self._tables[kind].pop(record_id, None) is not None
