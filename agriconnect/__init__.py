"""Agri-Connect RDC Flask Application Factory."""
import logging
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import IntegrityError
from config import config

db = SQLAlchemy()
logger = logging.getLogger(__name__)


def configure_logging(app):
    """Set up root logging once from the LOG_LEVEL setting."""
    level = app.config.get('LOG_LEVEL', 'INFO')
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    logging.getLogger('agriconnect').setLevel(level)


def seed_admin(app):
    """Create the admin account named in the config if it is missing."""
    from agriconnect.models import User

    email = app.config.get('SEED_ADMIN_EMAIL')
    password = app.config.get('SEED_ADMIN_PASSWORD')
    if not email or not password:
        return

    if User.query.filter_by(email=email).first():
        return

    # Fall back to the email's local part when 'admin' is already taken
    username = 'admin'
    if User.query.filter_by(username=username).first():
        username = email.split('@')[0]

    admin_user = User(
        username=username,
        email=email,
        first_name='Administrateur',
        last_name='Agri-Connect',
        user_type='admin'
    )
    admin_user.set_password(password)
    db.session.add(admin_user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning('Could not create admin account %s: username %s is taken', email, username)
        return
    logger.info('Created admin account %s', email)


def create_app(config_name='default'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)

    # Register blueprints
    from agriconnect.routes.main import main_bp
    from agriconnect.routes.auth import auth_bp
    from agriconnect.routes.products import products_bp
    from agriconnect.routes.orders import orders_bp
    from agriconnect.routes.reviews import reviews_bp
    from agriconnect.routes.contacts import contacts_bp
    from agriconnect.routes.admin import admin_bp

    app.register_blueprint(main_bp, url_prefix='/api')
    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(products_bp, url_prefix='/api')
    app.register_blueprint(orders_bp, url_prefix='/api')
    app.register_blueprint(reviews_bp, url_prefix='/api')
    app.register_blueprint(contacts_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    # Register error handlers
    from agriconnect.errors import AgriConnectError

    @app.errorhandler(AgriConnectError)
    def application_error(error):
        """Handle errors raised by handlers and storage."""
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors - unknown route."""
        return jsonify({'message': 'Ressource non trouvée'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'message': 'Méthode non autorisée'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors - internal server error."""
        db.session.rollback()  # Rollback any pending database transactions
        return jsonify({'message': 'Erreur interne du serveur'}), 500

    # Create database tables
    with app.app_context():
        from agriconnect import models  # noqa: F401
        db.create_all()
        seed_admin(app)

    return app
