"""Public reference data and platform statistics."""
from flask import Blueprint, jsonify
from agriconnect.catalog import CATEGORIES, PROVINCES
from agriconnect.handlers import api_errors
from agriconnect.storage import storage

main_bp = Blueprint('main', __name__)


@main_bp.route('/stats')
@api_errors('Erreur lors de la récupération des statistiques')
def stats():
    """Counters shown on the home page and admin dashboard."""
    return jsonify(storage.get_stats())


@main_bp.route('/categories')
def categories():
    return jsonify(CATEGORIES)


@main_bp.route('/provinces')
def provinces():
    return jsonify(PROVINCES)


@main_bp.route('/health')
def health():
    return jsonify({'status': 'ok'})
