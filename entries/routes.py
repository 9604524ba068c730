from flask import request, jsonify, current_app
from flasgger import swag_from

from app import get_storage
from app.validation import Validator, get_json_body, parse_id
from auth.utils import current_user_id
from entries.utils import parse_entry_create, parse_entry_filters, parse_entry_patch
from . import entries_bp

_ID_PARAMETER = {
    'name': 'entry_id',
    'in': 'path',
    'type': 'integer',
    'required': True,
    'description': 'ID of the entry'
}

_ENTRY_BODY = {
    'type': 'object',
    'properties': {
        'title': {'type': 'string', 'example': 'Letter to future me'},
        'type': {'type': 'string', 'enum': ['text', 'audio', 'video']},
        'content': {'type': 'string', 'example': 'Hello from the past'},
        'media_url': {'type': 'string', 'example': 'idb://recording-42'},
        'category_id': {'type': 'integer', 'example': 1},
        'metadata': {'type': 'string', 'example': '{"trimStart": 0, "trimEnd": 12.5}'}
    }
}


def _owned_entry(entry_id):
    """Return the entry if it exists and belongs to the current user."""
    entry = get_storage().get_entry(entry_id)
    if entry is None or entry.user_id != current_user_id():
        return None
    return entry


def _check_category(validator, category_id, user_id):
    if category_id is None:
        return
    category = get_storage().get_category(category_id)
    if category is None or category.user_id != user_id:
        validator.error('category_id', f'Category {category_id} does not exist')


@entries_bp.route('/entries', methods=['GET'])
@swag_from({
    'tags': ['Entries'],
    'description': 'Get the current user\'s entries, optionally filtered by type or category. '
                   'When both filters are given, type wins.',
    'parameters': [
        {'name': 'type', 'in': 'query', 'type': 'string', 'enum': ['text', 'audio', 'video']},
        {'name': 'category_id', 'in': 'query', 'type': 'integer'}
    ],
    'responses': {
        '200': {
            'description': 'Entries in creation order',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Entry'}}
        },
        '400': {'description': 'Invalid filter', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def get_entries():
    """List entries for the current user."""
    entry_type, category_id = parse_entry_filters(request.args)
    storage = get_storage()
    user_id = current_user_id()

    if entry_type:
        entries = storage.get_entries_by_type(user_id, entry_type)
    elif category_id is not None:
        entries = storage.get_entries_by_category(user_id, category_id)
    else:
        entries = storage.get_entries(user_id)

    return jsonify([entry.to_dict() for entry in entries])


@entries_bp.route('/entries/<entry_id>', methods=['GET'])
@swag_from({
    'tags': ['Entries'],
    'description': 'Get a specific entry',
    'parameters': [_ID_PARAMETER],
    'responses': {
        '200': {'description': 'Entry details', 'schema': {'$ref': '#/definitions/Entry'}},
        '400': {'description': 'Invalid ID'},
        '404': {'description': 'Entry not found'}
    }
})
def get_entry(entry_id):
    """Get a specific entry by ID."""
    entry = _owned_entry(parse_id(entry_id))

    if not entry:
        return jsonify({'error': 'Entry not found'}), 404

    return jsonify(entry.to_dict())


@entries_bp.route('/entries', methods=['POST'])
@swag_from({
    'tags': ['Entries'],
    'description': 'Create a new text, audio or video entry',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': dict(_ENTRY_BODY, required=['title', 'type'])
    }],
    'responses': {
        '201': {'description': 'Entry created', 'schema': {'$ref': '#/definitions/Entry'}},
        '400': {'description': 'Invalid input', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def create_entry():
    """Create an entry for the current user. New entries are always private."""
    values = parse_entry_create(get_json_body())
    user_id = current_user_id()
    validator = Validator(values)
    _check_category(validator, values['category_id'], user_id)
    validator.check()

    try:
        entry = get_storage().create_entry(user_id, **values)
    except Exception as e:
        current_app.logger.error(f'Error creating entry: {str(e)}')
        return jsonify({'error': 'Failed to create entry'}), 500

    return jsonify(entry.to_dict()), 201


@entries_bp.route('/entries/<entry_id>', methods=['PATCH'])
@swag_from({
    'tags': ['Entries'],
    'description': 'Update an entry. The type, owner, creation time and visibility cannot be changed.',
    'parameters': [
        _ID_PARAMETER,
        {'name': 'body', 'in': 'body', 'required': True, 'schema': _ENTRY_BODY}
    ],
    'responses': {
        '200': {'description': 'Updated entry', 'schema': {'$ref': '#/definitions/Entry'}},
        '400': {'description': 'Invalid input', 'schema': {'$ref': '#/definitions/Error'}},
        '404': {'description': 'Entry not found'}
    }
})
def update_entry(entry_id):
    """Apply a partial update to an entry."""
    entry_id = parse_id(entry_id)
    changes = parse_entry_patch(get_json_body())

    if not _owned_entry(entry_id):
        return jsonify({'error': 'Entry not found'}), 404

    validator = Validator(changes)
    _check_category(validator, changes.get('category_id'), current_user_id())
    validator.check()

    try:
        updated = get_storage().update_entry(entry_id, **changes)
    except Exception as e:
        current_app.logger.error(f'Error updating entry {entry_id}: {str(e)}')
        return jsonify({'error': 'Failed to update entry'}), 500

    if not updated:
        return jsonify({'error': 'Entry not found'}), 404

    return jsonify(updated.to_dict())


@entries_bp.route('/entries/<entry_id>', methods=['DELETE'])
@swag_from({
    'tags': ['Entries'],
    'description': 'Delete an entry together with its schedule',
    'parameters': [_ID_PARAMETER],
    'responses': {
        '204': {'description': 'Entry deleted'},
        '400': {'description': 'Invalid ID'},
        '404': {'description': 'Entry not found'}
    }
})
def delete_entry(entry_id):
    """Delete an entry and any schedule pointing at it."""
    entry_id = parse_id(entry_id)

    if not _owned_entry(entry_id):
        return jsonify({'error': 'Entry not found'}), 404

    try:
        deleted = get_storage().delete_entry(entry_id)
    except Exception as e:
        current_app.logger.error(f'Error deleting entry {entry_id}: {str(e)}')
        return jsonify({'error': 'Failed to delete entry'}), 500

    if not deleted:
        return jsonify({'error': 'Entry not found'}), 404

    return '', 204


@entries_bp.route('/entries-with-schedules', methods=['GET'])
@swag_from({
    'tags': ['Entries'],
    'description': 'Get every entry of the current user with its schedule and recipient embedded',
    'responses': {
        '200': {
            'description': 'Entries in creation order; schedule is null when not scheduled',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/EntryWithSchedule'}}
        }
    }
})
def get_entries_with_schedules():
    """Entries joined with their schedule and contact."""
    views = get_storage().get_entries_with_schedules(current_user_id())
    return jsonify([view.to_dict() for view in views])


@entries_bp.route('/scheduled-entries', methods=['GET'])
@swag_from({
    'tags': ['Entries'],
    'description': 'Get only the entries that have a schedule',
    'responses': {
        '200': {
            'description': 'Scheduled entries in creation order',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/EntryWithSchedule'}}
        }
    }
})
def get_scheduled_entries():
    """Entries that currently have a schedule."""
    views = get_storage().get_scheduled_entries(current_user_id())
    return jsonify([view.to_dict() for view in views])
