"""Contact request routes for Agri-Connect RDC."""
from flask import Blueprint, jsonify
from agriconnect.handlers import api_errors, parse_payload
from agriconnect.schemas import ContactCreatePayload, ContactUpdatePayload
from agriconnect.storage import storage

contacts_bp = Blueprint('contacts', __name__)


@contacts_bp.route('/contacts', methods=['POST'])
@api_errors('Erreur lors de la création du contact', 400)
def create_contact():
    """Send a buyer's inquiry to the farmer who owns the product."""
    payload = parse_payload(ContactCreatePayload)
    contact = storage.create_contact(payload.to_data())
    return jsonify(contact.to_dict())


@contacts_bp.route('/farmer/<int:farmer_id>/contacts')
@api_errors('Erreur lors de la récupération des contacts')
def farmer_contacts(farmer_id):
    return jsonify(storage.get_contacts_by_farmer(farmer_id))


@contacts_bp.route('/contacts/<int:contact_id>', methods=['PUT'])
@api_errors('Erreur lors de la mise à jour du contact', 400)
def update_contact(contact_id):
    payload = parse_payload(ContactUpdatePayload)
    contact = storage.update_contact(contact_id, payload.to_data())
    return jsonify(contact.to_dict())
