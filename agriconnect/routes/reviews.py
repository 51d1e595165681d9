"""Review routes for Agri-Connect RDC."""
from flask import Blueprint, jsonify
from agriconnect.handlers import api_errors, parse_payload
from agriconnect.schemas import ReviewCreatePayload
from agriconnect.storage import storage

reviews_bp = Blueprint('reviews', __name__)


@reviews_bp.route('/products/<int:product_id>/reviews')
@api_errors('Erreur lors de la récupération des avis')
def product_reviews(product_id):
    return jsonify(storage.get_reviews_by_product(product_id))


@reviews_bp.route('/reviews', methods=['POST'])
@api_errors("Erreur lors de la création de l'avis", 400)
def create_review():
    payload = parse_payload(ReviewCreatePayload)
    review = storage.create_review(payload.to_data())
    return jsonify(review.to_dict())


@reviews_bp.route('/products/<int:product_id>/rating')
@api_errors('Erreur lors de la récupération de la note')
def product_rating(product_id):
    return jsonify({'rating': storage.get_average_rating(product_id)})
