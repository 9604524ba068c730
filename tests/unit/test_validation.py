from datetime import datetime

import pytest

from app.validation import ValidationError, Validator, parse_datetime, parse_id
from entries.utils import parse_entry_create, parse_entry_patch


class TestParseDatetime:
    """Test ISO 8601 parsing into naive UTC."""

    @pytest.mark.parametrize('text, expected', [
        ('2030-01-01T09:00:00', datetime(2030, 1, 1, 9, 0)),
        ('2030-01-01T09:00:00Z', datetime(2030, 1, 1, 9, 0)),
        ('2030-01-01T09:00:00.000Z', datetime(2030, 1, 1, 9, 0)),
        ('2030-01-01T11:00:00+02:00', datetime(2030, 1, 1, 9, 0)),
    ])
    def test_valid(self, text, expected):
        assert parse_datetime(text) == expected

    @pytest.mark.parametrize('text', ['', 'tomorrow', '2030-13-01T00:00:00'])
    def test_invalid(self, text):
        assert parse_datetime(text) is None


class TestParseId:
    """Test path id parsing."""

    def test_valid(self):
        assert parse_id('12') == 12

    @pytest.mark.parametrize('value', ['abc', '0', '-3', '1.5', None])
    def test_invalid(self, value):
        with pytest.raises(ValidationError) as excinfo:
            parse_id(value)
        assert excinfo.value.message == 'Invalid ID'


class TestValidator:
    """Test field error collection."""

    def test_collects_every_error(self):
        validator = Validator({'title': 5, 'category_id': True, 'extra': 1})
        validator.only({'title', 'category_id'})
        validator.string('title', required=True)
        validator.integer('category_id')

        with pytest.raises(ValidationError) as excinfo:
            validator.check()

        fields = [detail['field'] for detail in excinfo.value.details]
        assert fields == ['extra', 'title', 'category_id']

    def test_optional_string_accepts_null(self):
        validator = Validator({'content': None, 'title': None})

        assert validator.string('content') is None
        assert validator.errors == []
        assert validator.string('title', required=True) is None
        assert validator.errors == [{'field': 'title', 'message': 'title is required'}]

    def test_choice(self):
        validator = Validator({'type': 'photo'})
        assert validator.choice('type', ('text', 'audio')) is None
        assert validator.errors[0]['field'] == 'type'


class TestEntryPayloads:
    """Test entry body parsing."""

    def test_create_maps_metadata(self):
        values = parse_entry_create({'title': 'Hi', 'type': 'text', 'metadata': '{}'})

        assert values['media_metadata'] == '{}'
        assert values['category_id'] is None

    def test_create_requires_title_and_type(self):
        with pytest.raises(ValidationError) as excinfo:
            parse_entry_create({'content': 'orphan'})

        assert {d['field'] for d in excinfo.value.details} == {'title', 'type'}

    def test_patch_returns_only_given_fields(self):
        assert parse_entry_patch({'content': None}) == {'content': None}

    @pytest.mark.parametrize('field', ['type', 'visibility', 'user_id', 'id', 'created_at'])
    def test_patch_rejects_fixed_fields(self, field):
        with pytest.raises(ValidationError):
            parse_entry_patch({field: 'x'})
