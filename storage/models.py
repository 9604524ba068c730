from app.extensions import db
from .records import SCHEDULE_PENDING, VISIBILITY_PRIVATE, iso_or_none

# sqlite_autoincrement keeps SQLite from handing out the id of a deleted
# last row again.
_TABLE_ARGS = {'sqlite_autoincrement': True}


class UserModel(db.Model):
    """Account that owns categories, entries and contacts."""
    __tablename__ = 'users'
    __table_args__ = _TABLE_ARGS

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(120), nullable=True)
    email = db.Column(db.String(120), nullable=True)

    def to_dict(self):
        """Return user data as dictionary, without the password."""
        return {
            'id': self.id,
            'username': self.username,
            'display_name': self.display_name,
            'email': self.email,
        }

    def __repr__(self):
        return f'<User {self.username}>'


class CategoryModel(db.Model):
    __tablename__ = 'categories'
    __table_args__ = _TABLE_ARGS

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)

    def to_dict(self):
        return {'id': self.id, 'user_id': self.user_id, 'name': self.name}

    def __repr__(self):
        return f'<Category {self.name}>'


class EntryModel(db.Model):
    """Journal entry. `metadata` is reserved on declarative models, so the
    column is mapped to the media_metadata attribute."""
    __tablename__ = 'entries'
    __table_args__ = _TABLE_ARGS

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=True)
    media_url = db.Column(db.String(500), nullable=True)
    type = db.Column(db.String(10), nullable=False)
    visibility = db.Column(db.String(10), nullable=False, default=VISIBILITY_PRIVATE)
    # Category deletion may leave this dangling, so no foreign key.
    category_id = db.Column(db.Integer, nullable=True)
    media_metadata = db.Column('metadata', db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False)

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

    def __repr__(self):
        return f'<Entry {self.title}>'


class ContactModel(db.Model):
    __tablename__ = 'contacts'
    __table_args__ = _TABLE_ARGS

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    phone_number = db.Column(db.String(40), nullable=True)
    email = db.Column(db.String(120), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'phone_number': self.phone_number,
            'email': self.email,
        }

    def __repr__(self):
        return f'<Contact {self.name}>'


class ScheduleModel(db.Model):
    """Delivery of an entry to a contact at a future date."""
    __tablename__ = 'schedules'
    __table_args__ = _TABLE_ARGS

    id = db.Column(db.Integer, primary_key=True)
    entry_id = db.Column(db.Integer, nullable=False, index=True)
    contact_id = db.Column(db.Integer, nullable=True)
    delivery_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=SCHEDULE_PENDING)
    reminder_enabled = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False)

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

    def __repr__(self):
        return f'<Schedule {self.id} entry={self.entry_id}>'
