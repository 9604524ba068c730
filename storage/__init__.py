from .base import Storage
from .errors import DuplicateUsernameError, ImmutableFieldError, ScheduleConflictError, StorageError
from .memory import MemStorage
from .records import ConflictPolicy, DeletePolicy
from .seed import seed_demo_data

BACKENDS = ('memory', 'sql')


def build_storage(config):
    """Create the storage backend named by STORAGE_BACKEND in *config*."""
    backend = config.get('STORAGE_BACKEND', 'memory')
    policies = {
        'schedule_conflict': config.get('SCHEDULE_CONFLICT_POLICY', ConflictPolicy.REJECT),
        'category_delete': config.get('CATEGORY_DELETE_POLICY', DeletePolicy.TOLERATE),
        'contact_delete': config.get('CONTACT_DELETE_POLICY', DeletePolicy.TOLERATE),
    }
    if backend == 'memory':
        return MemStorage(**policies)
    if backend == 'sql':
        # Imported here so the memory backend works without the models.
        from .sql import SqlStorage
        return SqlStorage(**policies)
    raise ValueError(f'Unknown storage backend: {backend!r} (expected one of {BACKENDS})')
