"""Payload parsing for the entry endpoints.

The JSON key `metadata` maps to the `media_metadata` storage field.
"""

from app.validation import Validator
from storage.records import ENTRY_TYPES

CREATE_FIELDS = {'title', 'type', 'content', 'media_url', 'category_id', 'metadata'}
PATCH_FIELDS = {'title', 'content', 'media_url', 'category_id', 'metadata'}


def parse_entry_create(data):
    """Validate a create body and return storage keyword arguments."""
    validator = Validator(data)
    validator.only(CREATE_FIELDS)
    values = {
        'title': validator.string('title', required=True, max_length=200),
        'type': validator.choice('type', ENTRY_TYPES, required=True),
        'content': validator.string('content'),
        'media_url': validator.string('media_url', max_length=500),
        'category_id': validator.integer('category_id'),
        'media_metadata': validator.string('metadata'),
    }
    validator.check()
    return values


def parse_entry_patch(data):
    """Validate a patch body and return only the fields it names.

    `id`, `user_id`, `type`, `created_at` and `visibility` cannot be patched.
    """
    validator = Validator(data)
    validator.only(PATCH_FIELDS)
    changes = {}
    if 'title' in data:
        changes['title'] = validator.string('title', required=True, max_length=200)
    if 'content' in data:
        changes['content'] = validator.string('content')
    if 'media_url' in data:
        changes['media_url'] = validator.string('media_url', max_length=500)
    if 'category_id' in data:
        changes['category_id'] = validator.integer('category_id')
    if 'metadata' in data:
        changes['media_metadata'] = validator.string('metadata')
    validator.check()
    return changes


def parse_entry_filters(args):
    """Read the `type` and `category_id` query filters."""
    validator = Validator({})
    entry_type = args.get('type') or None
    if entry_type is not None and entry_type not in ENTRY_TYPES:
        validator.error('type', f"type must be one of: {', '.join(ENTRY_TYPES)}")

    category_id = None
    raw_category = args.get('category_id')
    if raw_category:
        try:
            category_id = int(raw_category)
        except ValueError:
            validator.error('category_id', 'category_id must be an integer')
    validator.check()
    return entry_type, category_id
