class StorageError(Exception):
    """Base class for errors raised by the storage layer.

    Absence is never an error: lookups return None and deletes return False.
    """


class ImmutableFieldError(StorageError, ValueError):
    """An update named a field that may not be changed."""

    def __init__(self, entity, fields):
        self.entity = entity
        self.fields = sorted(fields)
        super().__init__(f"Cannot update {entity} field(s): {', '.join(self.fields)}")


class ScheduleConflictError(StorageError):
    """The entry already has a live schedule."""

    def __init__(self, entry_id, schedule_id):
        self.entry_id = entry_id
        self.schedule_id = schedule_id
        super().__init__(f'Entry {entry_id} already has schedule {schedule_id}')


class DuplicateUsernameError(StorageError):
    """A user with this username already exists."""

    def __init__(self, username):
        self.username = username
        super().__init__(f'Username already exists: {username}')
