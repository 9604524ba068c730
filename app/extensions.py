from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flasgger import Swagger

# Initialize extensions
db = SQLAlchemy()
jwt = JWTManager()

_NULLABLE_STRING = {'type': 'string', 'x-nullable': True}
_NULLABLE_INTEGER = {'type': 'integer', 'format': 'int64', 'x-nullable': True}

DEFINITIONS = {
    'User': {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer', 'format': 'int64'},
            'username': {'type': 'string'},
            'display_name': _NULLABLE_STRING,
            'email': _NULLABLE_STRING,
        }
    },
    'Category': {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer', 'format': 'int64'},
            'user_id': {'type': 'integer', 'format': 'int64'},
            'name': {'type': 'string'},
        }
    },
    'Entry': {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer', 'format': 'int64'},
            'user_id': {'type': 'integer', 'format': 'int64'},
            'title': {'type': 'string'},
            'content': _NULLABLE_STRING,
            'media_url': _NULLABLE_STRING,
            'type': {'type': 'string', 'enum': ['text', 'audio', 'video']},
            'visibility': {'type': 'string', 'enum': ['private', 'scheduled']},
            'category_id': _NULLABLE_INTEGER,
            'metadata': _NULLABLE_STRING,
            'created_at': {'type': 'string', 'format': 'date-time'},
        }
    },
    'Contact': {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer', 'format': 'int64'},
            'user_id': {'type': 'integer', 'format': 'int64'},
            'name': {'type': 'string'},
            'phone_number': _NULLABLE_STRING,
            'email': _NULLABLE_STRING,
        }
    },
    'Schedule': {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer', 'format': 'int64'},
            'entry_id': {'type': 'integer', 'format': 'int64'},
            'contact_id': _NULLABLE_INTEGER,
            'delivery_date': {'type': 'string', 'format': 'date-time'},
            'status': {'type': 'string'},
            'reminder_enabled': {'type': 'boolean'},
            'created_at': {'type': 'string', 'format': 'date-time'},
        }
    },
    'EntryWithSchedule': {
        'allOf': [
            {'$ref': '#/definitions/Entry'},
            {
                'type': 'object',
                'properties': {
                    'schedule': {
                        'x-nullable': True,
                        'allOf': [
                            {'$ref': '#/definitions/Schedule'},
                            {
                                'type': 'object',
                                'properties': {
                                    'contact': {'$ref': '#/definitions/Contact'}
                                }
                            }
                        ]
                    }
                }
            }
        ]
    },
    'Error': {
        'type': 'object',
        'properties': {
            'error': {'type': 'string', 'description': 'Error message'},
            'details': {
                'type': 'array',
                'items': {
                    'type': 'object',
                    'properties': {
                        'field': {'type': 'string'},
                        'message': {'type': 'string'}
                    }
                }
            }
        }
    }
}

# Configure Swagger
swagger = Swagger(
    template={
        "swagger": "2.0",
        "info": {
            "title": "Time Capsule API",
            "description": "API for journaling entries and scheduling their future delivery",
            "version": "1.0.0"
        },
        "securityDefinitions": {
            "Bearer": {
                "type": "apiKey",
                "name": "Authorization",
                "in": "header",
                "description": "JWT Authorization header using the Bearer scheme. Example: \"Authorization: Bearer {token}\""
            }
        },
        "security": [{"Bearer": []}],
        "schemes": ["http", "https"],
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "definitions": DEFINITIONS
    },
    config={
        "headers": [],
        "specs": [
            {
                "endpoint": 'apispec',
                "route": '/apispec.json',
                "rule_filter": lambda rule: True,
                "model_filter": lambda tag: True,
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/apidocs/"
    }
)
