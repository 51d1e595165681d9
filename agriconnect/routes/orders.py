"""Order routes for Agri-Connect RDC."""
from flask import Blueprint, jsonify
from agriconnect.errors import NotFoundError
from agriconnect.handlers import api_errors, parse_payload
from agriconnect.schemas import OrderCreatePayload, OrderUpdatePayload
from agriconnect.storage import storage

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/orders', methods=['POST'])
@api_errors('Erreur lors de la création de la commande', 400)
def create_order():
    """Place an order for a direct-sale product.

    The total price is computed here from the product price; any value sent
    by the client is ignored.
    """
    payload = parse_payload(OrderCreatePayload)
    order = storage.create_order(payload.to_data())
    return jsonify(order.to_dict())


@orders_bp.route('/orders/<int:order_id>')
@api_errors('Erreur lors de la récupération de la commande')
def order_detail(order_id):
    order = storage.get_order_with_details(order_id)
    if order is None:
        raise NotFoundError('Commande non trouvée')
    return jsonify(order)


@orders_bp.route('/buyer/<int:buyer_id>/orders')
@api_errors('Erreur lors de la récupération des commandes')
def buyer_orders(buyer_id):
    return jsonify(storage.get_orders_by_buyer(buyer_id))


@orders_bp.route('/farmer/<int:farmer_id>/orders')
@api_errors('Erreur lors de la récupération des commandes')
def farmer_orders(farmer_id):
    return jsonify(storage.get_orders_by_farmer(farmer_id))


@orders_bp.route('/orders/<int:order_id>', methods=['PUT'])
@api_errors('Erreur lors de la mise à jour de la commande', 400)
def update_order(order_id):
    """Move an order through pending -> confirmed -> delivered, or cancel it."""
    payload = parse_payload(OrderUpdatePayload)
    order = storage.update_order(order_id, payload.to_data())
    return jsonify(order.to_dict())
