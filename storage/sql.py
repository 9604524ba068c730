import logging
import threading
from contextlib import contextmanager

from app.extensions import db
from .base import CATEGORY, CONTACT, ENTRY, SCHEDULE, USER, Storage
from .models import CategoryModel, ContactModel, EntryModel, ScheduleModel, UserModel

logger = logging.getLogger(__name__)

MODELS = {
    USER: UserModel,
    CATEGORY: CategoryModel,
    ENTRY: EntryModel,
    CONTACT: ContactModel,
    SCHEDULE: ScheduleModel,
}


class SqlStorage(Storage):
    """Store backed by the Flask-SQLAlchemy session.

    Must be used inside an application context. Each public operation is one
    transaction: calls made from within another operation join it, and only
    the outermost commits. Any exception rolls back and propagates.
    """

    def __init__(self, **policies):
        super().__init__(**policies)
        self._local = threading.local()

    @contextmanager
    def _transaction(self):
        depth = getattr(self._local, 'depth', 0)
        self._local.depth = depth + 1
        try:
            yield
            if depth == 0:
                db.session.commit()
        except Exception:
            if depth == 0:
                db.session.rollback()
                logger.debug('Storage transaction rolled back')
            raise
        finally:
            self._local.depth = depth

    def _insert(self, kind, values):
        record = MODELS[kind](**values)
        db.session.add(record)
        db.session.flush()  # assigns the id
        return record

    def _get(self, kind, record_id):
        return db.session.get(MODELS[kind], record_id)

    def _filter(self, kind, **criteria):
        model = MODELS[kind]
        return model.query.filter_by(**criteria).order_by(model.id).all()

    def _patch(self, kind, record_id, values):
        record = self._get(kind, record_id)
        if record is None:
            return None
        for field, value in values.items():
            setattr(record, field, value)
        db.session.flush()
        return record

    def _remove(self, kind, record_id):
        record = self._get(kind, record_id)
        if record is None:
            return False
        db.session.delete(record)
        db.session.flush()
        return True
