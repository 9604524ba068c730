from flask import jsonify, current_app
from flasgger import swag_from

from app import get_storage
from app.validation import Validator, get_json_body, parse_id
from auth.utils import current_user_id
from storage import ScheduleConflictError
from . import schedules_bp

CREATE_FIELDS = ('entry_id', 'contact_id', 'delivery_date', 'reminder_enabled')
PATCH_FIELDS = ('contact_id', 'delivery_date', 'reminder_enabled')

_ID_PARAMETER = {
    'name': 'schedule_id',
    'in': 'path',
    'type': 'integer',
    'required': True,
    'description': 'ID of the schedule'
}

_SCHEDULE_BODY = {
    'type': 'object',
    'properties': {
        'entry_id': {'type': 'integer', 'example': 1},
        'contact_id': {'type': 'integer', 'example': 2},
        'delivery_date': {'type': 'string', 'format': 'date-time', 'example': '2030-01-01T09:00:00Z'},
        'reminder_enabled': {'type': 'boolean', 'example': False}
    }
}


def _check_contact(validator, contact_id, user_id):
    if contact_id is None:
        return
    contact = get_storage().get_contact(contact_id)
    if contact is None or contact.user_id != user_id:
        validator.error('contact_id', f'Contact {contact_id} does not exist')


def _owned_schedule(schedule_id):
    """Return the schedule if its entry belongs to the current user."""
    storage = get_storage()
    schedule = storage.get_schedule(schedule_id)
    if schedule is None:
        return None
    entry = storage.get_entry(schedule.entry_id)
    if entry is None or entry.user_id != current_user_id():
        return None
    return schedule


@schedules_bp.route('', methods=['GET'])
@swag_from({
    'tags': ['Schedules'],
    'description': 'Get all schedules for the current user\'s entries',
    'responses': {
        '200': {
            'description': 'Schedules in creation order',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Schedule'}}
        }
    }
})
def get_schedules():
    """List schedules of the current user's entries."""
    schedules = get_storage().get_schedules(current_user_id())
    return jsonify([schedule.to_dict() for schedule in schedules])


@schedules_bp.route('/<schedule_id>', methods=['GET'])
@swag_from({
    'tags': ['Schedules'],
    'description': 'Get a specific schedule',
    'parameters': [_ID_PARAMETER],
    'responses': {
        '200': {'description': 'Schedule details', 'schema': {'$ref': '#/definitions/Schedule'}},
        '400': {'description': 'Invalid ID'},
        '404': {'description': 'Schedule not found'}
    }
})
def get_schedule(schedule_id):
    """Get a specific schedule by ID."""
    schedule = _owned_schedule(parse_id(schedule_id))

    if not schedule:
        return jsonify({'error': 'Schedule not found'}), 404

    return jsonify(schedule.to_dict())


@schedules_bp.route('', methods=['POST'])
@swag_from({
    'tags': ['Schedules'],
    'description': 'Schedule delivery of an entry to a contact. The entry becomes "scheduled".',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': dict(_SCHEDULE_BODY, required=['entry_id', 'contact_id', 'delivery_date'])
    }],
    'responses': {
        '201': {'description': 'Schedule created', 'schema': {'$ref': '#/definitions/Schedule'}},
        '400': {'description': 'Invalid input or unknown entry/contact', 'schema': {'$ref': '#/definitions/Error'}},
        '409': {'description': 'The entry is already scheduled'}
    }
})
def create_schedule():
    """Create a schedule for one of the current user's entries."""
    user_id = current_user_id()
    storage = get_storage()

    validator = Validator(get_json_body())
    validator.only(CREATE_FIELDS)
    entry_id = validator.integer('entry_id', required=True)
    contact_id = validator.integer('contact_id', required=True)
    delivery_date = validator.timestamp('delivery_date', required=True)
    reminder_enabled = validator.boolean('reminder_enabled')

    if entry_id is not None:
        entry = storage.get_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            validator.error('entry_id', f'Entry {entry_id} does not exist')
    _check_contact(validator, contact_id, user_id)
    validator.check()

    try:
        schedule = storage.create_schedule(
            entry_id=entry_id,
            contact_id=contact_id,
            delivery_date=delivery_date,
            reminder_enabled=bool(reminder_enabled)
        )
    except ScheduleConflictError as e:
        return jsonify({'error': 'Entry is already scheduled', 'schedule_id': e.schedule_id}), 409
    except Exception as e:
        current_app.logger.error(f'Error creating schedule: {str(e)}')
        return jsonify({'error': 'Failed to create schedule'}), 500

    current_app.logger.info('Scheduled entry %s for delivery on %s', entry_id, delivery_date.isoformat())
    return jsonify(schedule.to_dict()), 201


@schedules_bp.route('/<schedule_id>', methods=['PATCH'])
@swag_from({
    'tags': ['Schedules'],
    'description': 'Change the recipient, delivery date or reminder of a schedule',
    'parameters': [
        _ID_PARAMETER,
        {'name': 'body', 'in': 'body', 'required': True, 'schema': _SCHEDULE_BODY}
    ],
    'responses': {
        '200': {'description': 'Updated schedule', 'schema': {'$ref': '#/definitions/Schedule'}},
        '400': {'description': 'Invalid input', 'schema': {'$ref': '#/definitions/Error'}},
        '404': {'description': 'Schedule not found'}
    }
})
def update_schedule(schedule_id):
    """Apply a partial update to a schedule. The entry cannot be changed."""
    schedule_id = parse_id(schedule_id)
    data = get_json_body()

    validator = Validator(data)
    validator.only(PATCH_FIELDS)
    changes = {}
    if 'contact_id' in data:
        changes['contact_id'] = validator.integer('contact_id', required=True)
        _check_contact(validator, changes['contact_id'], current_user_id())
    if 'delivery_date' in data:
        changes['delivery_date'] = validator.timestamp('delivery_date', required=True)
    if 'reminder_enabled' in data:
        changes['reminder_enabled'] = bool(validator.boolean('reminder_enabled'))
    validator.check()

    if not _owned_schedule(schedule_id):
        return jsonify({'error': 'Schedule not found'}), 404

    try:
        updated = get_storage().update_schedule(schedule_id, **changes)
    except Exception as e:
        current_app.logger.error(f'Error updating schedule {schedule_id}: {str(e)}')
        return jsonify({'error': 'Failed to update schedule'}), 500

    if not updated:
        return jsonify({'error': 'Schedule not found'}), 404

    return jsonify(updated.to_dict())


@schedules_bp.route('/<schedule_id>', methods=['DELETE'])
@swag_from({
    'tags': ['Schedules'],
    'description': 'Cancel a schedule. The entry becomes "private" again.',
    'parameters': [_ID_PARAMETER],
    'responses': {
        '204': {'description': 'Schedule deleted'},
        '400': {'description': 'Invalid ID'},
        '404': {'description': 'Schedule not found'}
    }
})
def delete_schedule(schedule_id):
    """Delete a schedule and return its entry to private."""
    schedule_id = parse_id(schedule_id)

    if not _owned_schedule(schedule_id):
        return jsonify({'error': 'Schedule not found'}), 404

    try:
        deleted = get_storage().delete_schedule(schedule_id)
    except Exception as e:
        current_app.logger.error(f'Error deleting schedule {schedule_id}: {str(e)}')
        return jsonify({'error': 'Failed to delete schedule'}), 500

    if not deleted:
        return jsonify({'error': 'Schedule not found'}), 404

    return '', 204
