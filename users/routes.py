from flask import jsonify
from flasgger import swag_from

from app import get_storage
from auth.utils import current_user_id
from . import users_bp


@users_bp.route('/me', methods=['GET'])
@swag_from({
    'tags': ['Users'],
    'description': 'Get current user profile',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {
            'description': 'User profile',
            'schema': {'$ref': '#/definitions/User'}
        },
        '401': {'description': 'Unauthorized'},
        '404': {'description': 'User not found'}
    }
})
def get_current_user_profile():
    """Get the current user's profile. The password is never returned."""
    user = get_storage().get_user(current_user_id())

    if not user:
        return jsonify({'error': 'User not found'}), 404

    return jsonify(user.to_dict())
