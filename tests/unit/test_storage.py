"""
test_storage.py
---------------
CRUD behaviour of the entity store, run against every backend.
"""
import pytest

from storage import DuplicateUsernameError, ImmutableFieldError


class TestUsers:
    """Test user creation and lookup."""

    def test_create_user_applies_defaults(self, storage):
        user = storage.create_user(username='demo', password='secret')

        assert user.id == 1
        assert user.username == 'demo'
        assert user.display_name is None
        assert user.email is None

    def test_get_user_by_username(self, storage, user):
        assert storage.get_user_by_username('demo').id == user.id
        assert storage.get_user_by_username('nobody') is None

    def test_duplicate_username_rejected(self, storage, user):
        with pytest.raises(DuplicateUsernameError):
            storage.create_user(username='demo', password='other')

    def test_to_dict_hides_password(self, user):
        assert 'password' not in user.to_dict()


class TestIds:
    """Test id assignment across create and delete."""

    def test_ids_strictly_increase_across_deletes(self, storage, user):
        ids = []
        for i in range(3):
            ids.append(storage.create_entry(user.id, f'Entry {i}', 'text').id)
        storage.delete_entry(ids[-1])
        storage.delete_entry(ids[0])
        ids.append(storage.create_entry(user.id, 'After delete', 'text').id)

        assert ids == [1, 2, 3, 4]

    def test_ids_are_scoped_per_type(self, storage, user):
        category = storage.create_category(user.id, 'Personal')
        entry = storage.create_entry(user.id, 'Hi', 'text')

        assert category.id == entry.id == 1
        assert storage.get_category(1).name == 'Personal'
        assert storage.get_entry(1).title == 'Hi'


class TestEntries:
    """Test entry CRUD and lookups."""

    def test_create_entry_defaults(self, storage, user):
        entry = storage.create_entry(user.id, 'Hi', 'text', content='hello')

        assert entry.id == 1
        assert entry.visibility == 'private'
        assert entry.created_at is not None
        assert entry.category_id is None
        assert entry.media_url is None
        assert entry.media_metadata is None

    def test_get_entry_absent_returns_none(self, storage):
        assert storage.get_entry(99) is None

    def test_get_entries_filters_by_user_in_insertion_order(self, storage, user):
        other = storage.create_user(username='other', password='x')
        storage.create_entry(user.id, 'First', 'text')
        storage.create_entry(other.id, 'Not mine', 'text')
        storage.create_entry(user.id, 'Second', 'audio')

        titles = [entry.title for entry in storage.get_entries(user.id)]
        assert titles == ['First', 'Second']

    def test_get_entries_by_type(self, storage, make_entry, user):
        make_entry('Note', 'text')
        make_entry('Voice', 'audio')
        make_entry('Clip', 'video')
        make_entry('Voice 2', 'audio')

        titles = [entry.title for entry in storage.get_entries_by_type(user.id, 'audio')]
        assert titles == ['Voice', 'Voice 2']

    def test_get_entries_by_category(self, storage, make_entry, user):
        work = storage.create_category(user.id, 'Work')
        make_entry('Standup', category_id=work.id)
        make_entry('Loose thought')

        titles = [entry.title for entry in storage.get_entries_by_category(user.id, work.id)]
        assert titles == ['Standup']

    def test_update_entry_merges_fields(self, storage, make_entry):
        entry = make_entry('Draft', content='old', media_metadata='{"trimStart": 0}')

        updated = storage.update_entry(entry.id, title='Final')

        assert updated.title == 'Final'
        assert updated.content == 'old'
        assert updated.media_metadata == '{"trimStart": 0}'
        assert storage.get_entry(entry.id).title == 'Final'

    def test_update_entry_absent_returns_none(self, storage):
        assert storage.update_entry(42, title='Nope') is None

    @pytest.mark.parametrize('field, value', [
        ('id', 7),
        ('user_id', 2),
        ('type', 'video'),
        ('created_at', None),
        ('visibility', 'scheduled'),
        ('unknown', 'x'),
    ])
    def test_update_entry_rejects_fixed_fields(self, storage, make_entry, field, value):
        entry = make_entry('Keep me')
        entry_id = entry.id

        with pytest.raises(ImmutableFieldError) as excinfo:
            storage.update_entry(entry_id, title='Changed', **{field: value})

        assert excinfo.value.fields == [field]
        stored = storage.get_entry(entry_id)
        assert stored.title == 'Keep me'
        assert stored.type == 'text'
        assert stored.visibility == 'private'

    def test_delete_entry_twice(self, storage, make_entry):
        entry_id = make_entry().id

        assert storage.delete_entry(entry_id) is True
        assert storage.get_entry(entry_id) is None
        assert storage.delete_entry(entry_id) is False

    def test_delete_missing_entry_returns_false(self, storage):
        assert storage.delete_entry(123) is False


class TestCategories:
    """Test category CRUD."""

    def test_categories_listed_per_user(self, storage, user):
        other = storage.create_user(username='other', password='x')
        storage.create_category(user.id, 'Personal')
        storage.create_category(other.id, 'Theirs')
        storage.create_category(user.id, 'Work')

        assert [c.name for c in storage.get_categories(user.id)] == ['Personal', 'Work']

    def test_delete_category(self, storage, user):
        category_id = storage.create_category(user.id, 'Ideas').id

        assert storage.delete_category(category_id) is True
        assert storage.get_category(category_id) is None
        assert storage.delete_category(category_id) is False


class TestContacts:
    """Test contact CRUD."""

    def test_create_and_update_contact(self, storage, user):
        contact = storage.create_contact(user.id, 'Mom', phone_number='555-1234')

        updated = storage.update_contact(contact.id, email='mom@example.com')

        assert updated.name == 'Mom'
        assert updated.phone_number == '555-1234'
        assert updated.email == 'mom@example.com'

    def test_update_contact_rejects_owner_change(self, storage, contact):
        with pytest.raises(ImmutableFieldError):
            storage.update_contact(contact.id, user_id=5)

    def test_update_missing_contact(self, storage):
        assert storage.update_contact(5, name='Ghost') is None

    def test_delete_contact(self, storage, contact):
        contact_id = contact.id

        assert storage.delete_contact(contact_id) is True
        assert storage.get_contact(contact_id) is None
        assert storage.delete_contact(contact_id) is False
