from flask import jsonify, current_app
from flasgger import swag_from

from app import get_storage
from app.validation import Validator, get_json_body, parse_id
from auth.utils import current_user_id, validate_email
from . import contacts_bp

FIELDS = ('name', 'phone_number', 'email')

_ID_PARAMETER = {
    'name': 'contact_id',
    'in': 'path',
    'type': 'integer',
    'required': True,
    'description': 'ID of the contact'
}

_CONTACT_BODY = {
    'type': 'object',
    'properties': {
        'name': {'type': 'string', 'example': 'Mom'},
        'phone_number': {'type': 'string', 'example': '555-123-4567'},
        'email': {'type': 'string', 'example': 'mom@example.com'}
    }
}


def _parse_contact(data, partial=False):
    """Validate a contact body. With *partial*, only the given fields are returned."""
    validator = Validator(data)
    validator.only(FIELDS)
    values = {}
    if not partial or 'name' in data:
        values['name'] = validator.string('name', required=True, max_length=120)
    if not partial or 'phone_number' in data:
        values['phone_number'] = validator.string('phone_number', max_length=40)
    if not partial or 'email' in data:
        values['email'] = validator.string('email', max_length=120)
        if values['email']:
            ok, message = validate_email(values['email'])
            if not ok:
                validator.error('email', message)
    validator.check()
    return values


def _owned_contact(contact_id):
    contact = get_storage().get_contact(contact_id)
    if contact is None or contact.user_id != current_user_id():
        return None
    return contact


@contacts_bp.route('', methods=['GET'])
@swag_from({
    'tags': ['Contacts'],
    'description': 'Get all contacts of the current user',
    'responses': {
        '200': {
            'description': 'Contacts in creation order',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Contact'}}
        }
    }
})
def get_contacts():
    """List the current user's contacts."""
    contacts = get_storage().get_contacts(current_user_id())
    return jsonify([contact.to_dict() for contact in contacts])


@contacts_bp.route('', methods=['POST'])
@swag_from({
    'tags': ['Contacts'],
    'description': 'Create a contact that entries can be delivered to',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': dict(_CONTACT_BODY, required=['name'])
    }],
    'responses': {
        '201': {'description': 'Contact created', 'schema': {'$ref': '#/definitions/Contact'}},
        '400': {'description': 'Invalid input', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def create_contact():
    """Create a contact for the current user."""
    values = _parse_contact(get_json_body())

    try:
        contact = get_storage().create_contact(current_user_id(), **values)
    except Exception as e:
        current_app.logger.error(f'Error creating contact: {str(e)}')
        return jsonify({'error': 'Failed to create contact'}), 500

    return jsonify(contact.to_dict()), 201


@contacts_bp.route('/<contact_id>', methods=['PATCH'])
@swag_from({
    'tags': ['Contacts'],
    'description': 'Update a contact',
    'parameters': [
        _ID_PARAMETER,
        {'name': 'body', 'in': 'body', 'required': True, 'schema': _CONTACT_BODY}
    ],
    'responses': {
        '200': {'description': 'Updated contact', 'schema': {'$ref': '#/definitions/Contact'}},
        '400': {'description': 'Invalid input', 'schema': {'$ref': '#/definitions/Error'}},
        '404': {'description': 'Contact not found'}
    }
})
def update_contact(contact_id):
    """Apply a partial update to a contact."""
    contact_id = parse_id(contact_id)
    changes = _parse_contact(get_json_body(), partial=True)

    if not _owned_contact(contact_id):
        return jsonify({'error': 'Contact not found'}), 404

    try:
        updated = get_storage().update_contact(contact_id, **changes)
    except Exception as e:
        current_app.logger.error(f'Error updating contact {contact_id}: {str(e)}')
        return jsonify({'error': 'Failed to update contact'}), 500

    if not updated:
        return jsonify({'error': 'Contact not found'}), 404

    return jsonify(updated.to_dict())


@contacts_bp.route('/<contact_id>', methods=['DELETE'])
@swag_from({
    'tags': ['Contacts'],
    'description': 'Delete a contact. Schedules addressed to it are handled by the configured contact delete policy.',
    'parameters': [_ID_PARAMETER],
    'responses': {
        '204': {'description': 'Contact deleted'},
        '400': {'description': 'Invalid ID'},
        '404': {'description': 'Contact not found'}
    }
})
def delete_contact(contact_id):
    """Delete one of the current user's contacts."""
    contact_id = parse_id(contact_id)

    if not _owned_contact(contact_id):
        return jsonify({'error': 'Contact not found'}), 404

    try:
        deleted = get_storage().delete_contact(contact_id)
    except Exception as e:
        current_app.logger.error(f'Error deleting contact {contact_id}: {str(e)}')
        return jsonify({'error': 'Failed to delete contact'}), 500

    if not deleted:
        return jsonify({'error': 'Contact not found'}), 404

    return '', 204
