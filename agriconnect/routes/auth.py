"""Authentication and profile routes for Agri-Connect RDC."""
import logging
from flask import Blueprint, jsonify
from agriconnect.errors import AuthenticationFailed, NotFoundError, ValidationFailed
from agriconnect.handlers import api_errors, parse_payload
from agriconnect.schemas import LoginPayload, RegisterPayload, UserUpdatePayload
from agriconnect.storage import storage

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)


@auth_bp.route('/register', methods=['POST'])
@api_errors("Erreur lors de l'inscription", 400)
def register():
    """Create a farmer or buyer account."""
    payload = parse_payload(RegisterPayload)

    # Check if user already exists
    if storage.get_user_by_email(payload.email):
        raise ValidationFailed('Un utilisateur avec cet email existe déjà')

    if storage.get_user_by_username(payload.username):
        raise ValidationFailed("Ce nom d'utilisateur est déjà pris")

    user = storage.create_user(payload.to_data())
    logger.info('Registered %s %s', user.user_type, user.id)
    return jsonify(user.to_dict())


@auth_bp.route('/login', methods=['POST'])
@api_errors('Erreur lors de la connexion')
def login():
    """Check credentials and return the user record.

    There is no session: the client keeps the returned user in memory.
    """
    payload = parse_payload(LoginPayload)

    user = storage.get_user_by_email(payload.email)
    if not user or not user.check_password(payload.password):
        raise AuthenticationFailed('Email ou mot de passe incorrect')

    if not user.is_active:
        raise AuthenticationFailed('Ce compte a été suspendu')

    return jsonify(user.to_dict())


@auth_bp.route('/users/<int:user_id>')
@api_errors("Erreur lors de la récupération de l'utilisateur")
def get_user(user_id):
    user = storage.get_user(user_id)
    if user is None:
        raise NotFoundError('Utilisateur non trouvé')
    return jsonify(user.to_dict())


@auth_bp.route('/users/<int:user_id>', methods=['PUT'])
@api_errors('Erreur lors de la mise à jour du profil', 400)
def update_user(user_id):
    """Update profile fields (and optionally the password)."""
    payload = parse_payload(UserUpdatePayload)
    user = storage.update_user(user_id, payload.to_data())
    return jsonify(user.to_dict())
