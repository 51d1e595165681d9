"""Admin moderation routes for Agri-Connect RDC."""
from flask import Blueprint, jsonify
from agriconnect.handlers import api_errors
from agriconnect.storage import storage

admin_bp = Blueprint('admin', __name__)


# User Management
@admin_bp.route('/users')
@api_errors('Erreur lors de la récupération des utilisateurs')
def users():
    """List all users, newest first."""
    return jsonify([user.to_dict() for user in storage.get_all_users()])


@admin_bp.route('/users/<int:user_id>/toggle-active', methods=['PUT'])
@api_errors("Erreur lors de la mise à jour de l'utilisateur", 400)
def toggle_active(user_id):
    """Suspend or reactivate a farmer/buyer."""
    user = storage.toggle_user_active(user_id)
    return jsonify(user.to_dict())


# Product Moderation
@admin_bp.route('/products')
@api_errors('Erreur lors de la récupération des produits')
def products():
    """Active products, approved or awaiting approval."""
    products = storage.get_all_products(is_active=True)
    return jsonify([product.to_dict() for product in products])


@admin_bp.route('/products/<int:product_id>/approve', methods=['PUT'])
@api_errors("Erreur lors de l'approbation du produit", 400)
def approve_product(product_id):
    product = storage.approve_product(product_id)
    return jsonify(product.to_dict())
