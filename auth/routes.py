from flask import request, jsonify, current_app
from flask_jwt_extended import create_access_token
from flasgger import swag_from
from werkzeug.security import check_password_hash, generate_password_hash

from app import get_storage
from app.validation import Validator, get_json_body
from auth.utils import validate_email, validate_password
from storage import DuplicateUsernameError
from . import auth_bp


def _issue_token(user):
    return create_access_token(identity=str(user.id))


@auth_bp.route('/register', methods=['POST'])
@swag_from({
    'tags': ['Authentication'],
    'description': 'Register a new user',
    'security': [],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'username': {'type': 'string', 'example': 'johndoe'},
                'password': {'type': 'string', 'example': 'securepassword123'},
                'display_name': {'type': 'string', 'example': 'John Doe'},
                'email': {'type': 'string', 'example': 'john@example.com'}
            },
            'required': ['username', 'password']
        }
    }],
    'responses': {
        '201': {
            'description': 'User registered successfully',
            'schema': {
                'type': 'object',
                'properties': {
                    'message': {'type': 'string'},
                    'user': {'$ref': '#/definitions/User'},
                    'token': {'type': 'string'}
                }
            }
        },
        '400': {'description': 'Invalid input data', 'schema': {'$ref': '#/definitions/Error'}},
        '409': {'description': 'Username already exists'}
    }
})
def register():
    """Register a new user."""
    data = get_json_body()
    validator = Validator(data)
    username = validator.string('username', required=True, max_length=80)
    password = validator.string('password', required=True)
    display_name = validator.string('display_name', max_length=120)
    email = validator.string('email', max_length=120)

    if password is not None:
        ok, message = validate_password(password)
        if not ok:
            validator.error('password', message)
    if email:
        ok, message = validate_email(email)
        if not ok:
            validator.error('email', message)
    validator.check()

    storage = get_storage()
    if storage.get_user_by_username(username) is not None:
        return jsonify({'error': 'Username already exists'}), 409

    try:
        user = storage.create_user(
            username=username,
            password=generate_password_hash(password),
            display_name=display_name,
            email=email
        )
    except DuplicateUsernameError:
        return jsonify({'error': 'Username already exists'}), 409
    except Exception as e:
        current_app.logger.error(f'Registration error: {str(e)}')
        return jsonify({'error': 'Failed to register user'}), 500

    current_app.logger.info('Registered user %s', user.id)
    return jsonify({
        'message': 'User registered successfully',
        'user': user.to_dict(),
        'token': _issue_token(user)
    }), 201


@auth_bp.route('/login', methods=['POST'])
@swag_from({
    'tags': ['Authentication'],
    'description': 'Login with username and password',
    'security': [],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'username': {'type': 'string', 'example': 'demo'},
                'password': {'type': 'string', 'example': 'password'}
            },
            'required': ['username', 'password']
        }
    }],
    'responses': {
        '200': {
            'description': 'Login successful',
            'schema': {
                'type': 'object',
                'properties': {
                    'message': {'type': 'string'},
                    'user': {'$ref': '#/definitions/User'},
                    'token': {'type': 'string'}
                }
            }
        },
        '400': {'description': 'Invalid input data', 'schema': {'$ref': '#/definitions/Error'}},
        '401': {'description': 'Invalid credentials'}
    }
})
def login():
    """Login user and return JWT token."""
    validator = Validator(get_json_body())
    username = validator.string('username', required=True)
    password = validator.string('password', required=True)
    validator.check()

    user = get_storage().get_user_by_username(username)

    if user and check_password_hash(user.password, password):
        return jsonify({
            'message': 'Login successful',
            'user': user.to_dict(),
            'token': _issue_token(user)
        })

    return jsonify({'error': 'Invalid username or password'}), 401
