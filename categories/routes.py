from flask import jsonify, current_app
from flasgger import swag_from

from app import get_storage
from app.validation import Validator, get_json_body, parse_id
from auth.utils import current_user_id
from . import categories_bp

_ID_PARAMETER = {
    'name': 'category_id',
    'in': 'path',
    'type': 'integer',
    'required': True,
    'description': 'ID of the category'
}


@categories_bp.route('', methods=['GET'])
@swag_from({
    'tags': ['Categories'],
    'description': 'Get all categories of the current user',
    'responses': {
        '200': {
            'description': 'Categories in creation order',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Category'}}
        }
    }
})
def get_categories():
    """List the current user's categories."""
    categories = get_storage().get_categories(current_user_id())
    return jsonify([category.to_dict() for category in categories])


@categories_bp.route('', methods=['POST'])
@swag_from({
    'tags': ['Categories'],
    'description': 'Create a category',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {'name': {'type': 'string', 'example': 'Travel'}},
            'required': ['name']
        }
    }],
    'responses': {
        '201': {'description': 'Category created', 'schema': {'$ref': '#/definitions/Category'}},
        '400': {'description': 'Invalid input', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def create_category():
    """Create a category for the current user."""
    validator = Validator(get_json_body())
    validator.only({'name'})
    name = validator.string('name', required=True, max_length=100)
    validator.check()

    try:
        category = get_storage().create_category(current_user_id(), name)
    except Exception as e:
        current_app.logger.error(f'Error creating category: {str(e)}')
        return jsonify({'error': 'Failed to create category'}), 500

    return jsonify(category.to_dict()), 201


@categories_bp.route('/<category_id>', methods=['DELETE'])
@swag_from({
    'tags': ['Categories'],
    'description': 'Delete a category. Entries filed under it are handled by the configured category delete policy.',
    'parameters': [_ID_PARAMETER],
    'responses': {
        '204': {'description': 'Category deleted'},
        '400': {'description': 'Invalid ID'},
        '404': {'description': 'Category not found'}
    }
})
def delete_category(category_id):
    """Delete one of the current user's categories."""
    category_id = parse_id(category_id)
    storage = get_storage()
    category = storage.get_category(category_id)

    if not category or category.user_id != current_user_id():
        return jsonify({'error': 'Category not found'}), 404

    try:
        deleted = storage.delete_category(category_id)
    except Exception as e:
        current_app.logger.error(f'Error deleting category {category_id}: {str(e)}')
        return jsonify({'error': 'Failed to delete category'}), 500

    if not deleted:
        return jsonify({'error': 'Category not found'}), 404

    return '', 204
