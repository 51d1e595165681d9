"""Product listing routes for Agri-Connect RDC."""
from flask import Blueprint, jsonify, request
from agriconnect.errors import NotFoundError
from agriconnect.handlers import api_errors, parse_payload
from agriconnect.schemas import ProductCreatePayload, ProductUpdatePayload
from agriconnect.storage import storage

products_bp = Blueprint('products', __name__)


@products_bp.route('/products')
@api_errors('Erreur lors de la récupération des produits')
def list_products():
    """Public listing with optional category/province/saleMode/search filters.

    Only active products are listed. Unapproved ones are hidden unless the
    caller passes ``approved=false``.
    """
    filters = {'is_active': True}

    if request.args.get('approved', '') != 'false':
        filters['is_approved'] = True

    filters['category'] = request.args.get('category', '')
    filters['province'] = request.args.get('province', '')
    filters['search'] = request.args.get('search', '')
    filters['sale_mode'] = request.args.get('saleMode', '')

    products = storage.get_all_products(**filters)

    limit = request.args.get('limit', type=int)
    if limit and limit > 0:
        products = products[:limit]

    return jsonify([product.to_dict() for product in products])


@products_bp.route('/products/<int:product_id>')
@api_errors('Erreur lors de la récupération du produit')
def product_detail(product_id):
    """Product with its farmer and rating summary."""
    product = storage.get_product_with_farmer(product_id)
    if product is None:
        raise NotFoundError('Produit non trouvé')
    return jsonify(product)


@products_bp.route('/products', methods=['POST'])
@api_errors('Erreur lors de la création du produit', 400)
def create_product():
    """Create a listing. It stays hidden until an admin approves it."""
    payload = parse_payload(ProductCreatePayload)
    product = storage.create_product(payload.to_data())
    return jsonify(product.to_dict())


@products_bp.route('/products/<int:product_id>', methods=['PUT'])
@api_errors('Erreur lors de la mise à jour du produit', 400)
def update_product(product_id):
    payload = parse_payload(ProductUpdatePayload)
    product = storage.update_product(product_id, payload.to_data())
    return jsonify(product.to_dict())


@products_bp.route('/products/<int:product_id>', methods=['DELETE'])
@api_errors('Erreur lors de la suppression du produit')
def delete_product(product_id):
    storage.delete_product(product_id)
    return jsonify({'message': 'Produit supprimé avec succès'})


@products_bp.route('/farmer/<int:farmer_id>/products')
@api_errors("Erreur lors de la récupération des produits de l'agriculteur")
def farmer_products(farmer_id):
    """All of a farmer's products, approved or not."""
    products = storage.get_products_by_farmer(farmer_id)
    return jsonify([product.to_dict() for product in products])
