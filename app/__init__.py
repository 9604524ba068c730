import logging

from flask import Flask, current_app, jsonify

from app.config import Config
from app.validation import ValidationError
from storage import DuplicateUsernameError, ImmutableFieldError, build_storage, seed_demo_data


def get_storage():
    """Return the storage instance owned by the current app."""
    return current_app.extensions['storage']


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    logging.getLogger('storage').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    from app.extensions import db, jwt, swagger
    db.init_app(app)
    jwt.init_app(app)

    # Build the store; the app owns its lifetime
    storage = build_storage(app.config)
    app.extensions['storage'] = storage
    with app.app_context():
        if app.config['STORAGE_BACKEND'] == 'sql':
            db.create_all()
        if app.config.get('SEED_DEMO_DATA'):
            user = seed_demo_data(storage)
            app.logger.debug('Demo user %s ready', user.id)

    # Register blueprints
    from auth import auth_bp
    from users import users_bp
    from categories import categories_bp
    from entries import entries_bp
    from contacts import contacts_bp
    from schedules import schedules_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(categories_bp, url_prefix='/api/categories')
    app.register_blueprint(entries_bp, url_prefix='/api')
    app.register_blueprint(contacts_bp, url_prefix='/api/contacts')
    app.register_blueprint(schedules_bp, url_prefix='/api/schedules')

    register_error_handlers(app)

    # Initialize Swagger
    swagger.init_app(app)

    # Simple root endpoint for quick check
    @app.route('/')
    def index():
        return {'message': 'Time Capsule API is running', 'docs': '/apidocs/'}

    return app


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(ImmutableFieldError)
    def handle_immutable_field(e):
        details = [{'field': field, 'message': f'{field} cannot be changed'} for field in e.fields]
        return jsonify({'error': 'Invalid input', 'details': details}), 400

    @app.errorhandler(DuplicateUsernameError)
    def handle_duplicate_username(e):
        return jsonify({'error': 'Username already exists'}), 409

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def handle_internal_error(e):
        app.logger.error(f'Unhandled error: {str(getattr(e, "original_exception", e))}')
        return jsonify({'error': 'Internal server error'}), 500
