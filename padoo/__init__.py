"""
Padoo Delivery Admin - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from padoo.extensions import db, login_manager, session_store
from padoo.config import Config


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.testing:
        logging.basicConfig(
            level=app.config.get('LOG_LEVEL', 'INFO'),
            format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    session_store.init_app(app)

    # Register blueprints
    from padoo.auth import auth_bp
    from padoo.admin import admin_bp
    from padoo.public import public_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(public_bp)

    # Bearer-token loader for Flask-Login (drivers and shops)
    @login_manager.request_loader
    def load_account_from_request(req):
        from padoo.auth.tokens import account_for_token, bearer_token
        return account_for_token(bearer_token(req))

    @login_manager.unauthorized_handler
    def unauthorized():
        from padoo.services import fail
        return fail('Session expired. Please log in again.', 401, code='SESSION_EXPIRED')

    _register_error_handlers(app)

    # Create database tables
    with app.app_context():
        if not app.testing:
            os.makedirs(os.path.join(app.config['BASE_DIR'], 'instance'), exist_ok=True)
        db.create_all()
        _ensure_default_data(app)

    return app


def _register_error_handlers(app):
    """Keep the ``{success, message}`` envelope on API errors."""
    from padoo.services import fail

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith('/api/'):
            return error
        return fail(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        db.session.rollback()
        return fail('Internal server error', 500)


def _ensure_default_data(app):
    """Seed the default categories when the table is empty."""
    from padoo.models import Category

    if not app.config.get('SEED_DEFAULT_CATEGORIES'):
        return
    if Category.query.first():
        return

    defaults = [
        {'name': 'Restaurant', 'description': 'Full meals and takeaway', 'icon': 'fas fa-utensils'},
        {'name': 'Cafe',       'description': 'Coffee and snacks',        'icon': 'fas fa-coffee'},
        {'name': 'Grocery',    'description': 'Supermarkets and minimarkets', 'icon': 'fas fa-shopping-basket'},
        {'name': 'Pharmacy',   'description': 'Pharmacies',               'icon': 'fas fa-prescription-bottle'},
    ]
    try:
        for item in defaults:
            db.session.add(Category(color=app.config['DEFAULT_CATEGORY_COLOR'], **item))
        db.session.commit()
        app.logger.info('Created %d default categories', len(defaults))
    except Exception:
        db.session.rollback()
        app.logger.exception('Could not create default categories')
