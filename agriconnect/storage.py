"""Storage layer: one method per query shape over the SQLAlchemy models."""
import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import case, func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from agriconnect import db
from agriconnect.catalog import CONTACT_STATUSES
from agriconnect.errors import InsufficientStockError, NotFoundError, ValidationFailed
from agriconnect.models import Contact, Order, Product, Review, User

logger = logging.getLogger(__name__)

# Allowed status moves; anything else is rejected
ORDER_TRANSITIONS = {
    'pending': {'confirmed', 'cancelled'},
    'confirmed': {'delivered', 'cancelled'},
    'delivered': set(),
    'cancelled': set(),
}

# Largest value a Numeric(10, 2) order total can hold
MAX_ORDER_TOTAL = Decimal('99999999.99')


def _apply(instance, data):
    for key, value in data.items():
        setattr(instance, key, value)


class Storage:
    """Database access for users, products, orders, reviews and contacts."""

    # User operations

    def get_user(self, user_id):
        return db.session.get(User, user_id)

    def get_user_by_email(self, email):
        return User.query.filter_by(email=email).first()

    def get_user_by_username(self, username):
        return User.query.filter_by(username=username).first()

    def create_user(self, data):
        """Create a user from a payload holding a plain-text ``password``."""
        data = dict(data)
        password = data.pop('password')
        user = User(**data)
        user.set_password(password)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ValidationFailed("Un utilisateur avec cet email ou ce nom d'utilisateur existe déjà")
        return user

    def update_user(self, user_id, data):
        user = self.get_user(user_id)
        if user is None:
            raise NotFoundError('Utilisateur non trouvé')
        data = dict(data)
        password = data.pop('password', None)
        _apply(user, data)
        if password:
            user.set_password(password)
        db.session.commit()
        return user

    def get_all_users(self):
        return User.query.order_by(User.created_at.desc(), User.id.desc()).all()

    def toggle_user_active(self, user_id):
        """Suspend or reactivate a farmer/buyer account."""
        user = self.get_user(user_id)
        if user is None:
            raise NotFoundError('Utilisateur non trouvé')
        if user.user_type == 'admin':
            raise ValidationFailed('Impossible de désactiver un administrateur')
        user.is_active = not user.is_active
        db.session.commit()
        return user

    # Product operations

    def get_product(self, product_id):
        return db.session.get(Product, product_id)

    def get_product_with_farmer(self, product_id):
        """Product dict with its farmer summary and rating aggregates."""
        product = Product.query.options(joinedload(Product.farmer)).filter_by(id=product_id).first()
        if product is None:
            return None

        result = product.to_dict()
        farmer = product.farmer
        result['farmer'] = farmer.to_summary('id', 'firstName', 'lastName', 'phone') if farmer else None
        result['averageRating'] = self.get_average_rating(product_id)
        result['reviewCount'] = Review.query.filter_by(product_id=product_id).count()
        return result

    def get_products_by_farmer(self, farmer_id):
        return Product.query.filter_by(farmer_id=farmer_id).order_by(
            Product.created_at.desc(), Product.id.desc()
        ).all()

    def get_all_products(self, category=None, province=None, search=None,
                         sale_mode=None, is_active=None, is_approved=None):
        """List products matching every filter that is provided."""
        query = Product.query

        if is_active is not None:
            query = query.filter(Product.is_active == is_active)

        if is_approved is not None:
            query = query.filter(Product.is_approved == is_approved)

        if category:
            query = query.filter_by(category=category)

        if province:
            query = query.filter_by(province=province)

        if sale_mode:
            query = query.filter_by(sale_mode=sale_mode)

        if search:
            query = query.filter(Product.name.ilike(f'%{search}%'))

        return query.order_by(Product.created_at.desc(), Product.id.desc()).all()

    def create_product(self, data):
        """Create a listing; stock starts full and approval starts off."""
        farmer = self.get_user(data['farmer_id'])
        if farmer is None or farmer.user_type != 'farmer':
            raise ValidationFailed('Agriculteur non trouvé')

        data = dict(data)
        images = data.pop('images', None)
        product = Product(**data)
        product.available_quantity = product.quantity
        product.is_approved = False
        product.image_list = images
        db.session.add(product)
        db.session.commit()
        return product

    def update_product(self, product_id, data):
        product = self.get_product(product_id)
        if product is None:
            raise NotFoundError('Produit non trouvé')

        data = dict(data)
        quantity = data.get('quantity', product.quantity)
        available = data.get('available_quantity', product.available_quantity)
        if available > quantity:
            raise ValidationFailed(
                'La quantité disponible ne peut pas dépasser la quantité totale'
            )

        if 'images' in data:
            product.image_list = data.pop('images')
        _apply(product, data)
        db.session.commit()
        return product

    def delete_product(self, product_id):
        """Delete a product along with its orders, reviews and contacts."""
        product = self.get_product(product_id)
        if product is None:
            raise NotFoundError('Produit non trouvé')
        db.session.delete(product)
        db.session.commit()

    def approve_product(self, product_id):
        product = self.get_product(product_id)
        if product is None:
            raise NotFoundError('Produit non trouvé')
        product.is_approved = True
        db.session.commit()
        logger.info('Product %s approved', product_id)
        return product

    # Order operations

    def get_order(self, order_id):
        return db.session.get(Order, order_id)

    def get_order_with_details(self, order_id):
        order = Order.query.options(
            joinedload(Order.product), joinedload(Order.farmer), joinedload(Order.buyer)
        ).filter_by(id=order_id).first()
        if order is None:
            return None
        result = order.to_dict()
        result['product'] = order.product.to_dict()
        result['farmer'] = order.farmer.to_summary()
        result['buyer'] = order.buyer.to_summary()
        return result

    def get_orders_by_buyer(self, buyer_id):
        orders = Order.query.options(
            joinedload(Order.product), joinedload(Order.farmer)
        ).filter_by(buyer_id=buyer_id).order_by(Order.created_at.desc(), Order.id.desc()).all()

        results = []
        for order in orders:
            item = order.to_dict()
            item['product'] = order.product.to_dict()
            item['farmer'] = order.farmer.to_summary()
            results.append(item)
        return results

    def get_orders_by_farmer(self, farmer_id):
        orders = Order.query.options(
            joinedload(Order.product), joinedload(Order.buyer)
        ).filter_by(farmer_id=farmer_id).order_by(Order.created_at.desc(), Order.id.desc()).all()

        results = []
        for order in orders:
            item = order.to_dict()
            item['product'] = order.product.to_dict()
            item['buyer'] = order.buyer.to_summary()
            results.append(item)
        return results

    def create_order(self, data):
        """Reserve stock and record the order in one transaction.

        The stock check and the decrement are a single conditional UPDATE, so
        two concurrent orders cannot both take the last units.
        """
        product = self.get_product(data['product_id'])
        if product is None:
            raise InsufficientStockError()
        if not product.is_active or not product.is_approved:
            raise ValidationFailed("Ce produit n'est pas disponible à la commande")
        if product.sale_mode != 'direct':
            raise ValidationFailed('Ce produit se vend uniquement sur contact')
        if self.get_user(data['buyer_id']) is None:
            raise ValidationFailed('Acheteur non trouvé')

        quantity = data['quantity']
        total_price = product.price * quantity
        if total_price > MAX_ORDER_TOTAL:
            raise ValidationFailed('Le montant de la commande est trop élevé')

        result = db.session.execute(
            update(Product)
            .where(Product.id == product.id, Product.available_quantity >= quantity)
            .values(
                available_quantity=Product.available_quantity - quantity,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.session.rollback()
            logger.warning(
                'Order rejected: product %s has less than %s %s left',
                product.id, quantity, product.unit,
            )
            raise InsufficientStockError()

        order = Order(
            buyer_id=data['buyer_id'],
            product_id=product.id,
            farmer_id=product.farmer_id,
            quantity=quantity,
            total_price=total_price,
            status='pending',
            delivery_address=data.get('delivery_address'),
            notes=data.get('notes'),
        )
        db.session.add(order)
        db.session.commit()
        logger.info('Order %s created for product %s (qty %s)', order.id, product.id, quantity)
        return order

    def update_order(self, order_id, data):
        """Update an order; cancelling puts its quantity back in stock."""
        order = self.get_order(order_id)
        if order is None:
            raise NotFoundError('Commande non trouvée')

        data = dict(data)
        status = data.pop('status', None)
        if status and status != order.status:
            if status not in ORDER_TRANSITIONS[order.status]:
                raise ValidationFailed('Changement de statut non autorisé')
            if status == 'cancelled':
                restocked = Product.available_quantity + order.quantity
                db.session.execute(
                    update(Product)
                    .where(Product.id == order.product_id)
                    .values(
                        available_quantity=case(
                            (restocked > Product.quantity, Product.quantity),
                            else_=restocked,
                        ),
                        updated_at=datetime.utcnow(),
                    )
                    .execution_options(synchronize_session=False)
                )
            order.status = status

        _apply(order, data)
        db.session.commit()
        return order

    # Review operations

    def get_reviews_by_product(self, product_id):
        reviews = Review.query.options(joinedload(Review.buyer)).filter_by(
            product_id=product_id
        ).order_by(Review.created_at.desc(), Review.id.desc()).all()

        results = []
        for review in reviews:
            item = review.to_dict()
            item['buyer'] = review.buyer.to_summary('id', 'firstName', 'lastName')
            results.append(item)
        return results

    def create_review(self, data):
        product = self.get_product(data['product_id'])
        if product is None:
            raise NotFoundError('Produit non trouvé')
        if self.get_user(data['buyer_id']) is None:
            raise ValidationFailed('Acheteur non trouvé')

        review = Review(farmer_id=product.farmer_id, **data)
        db.session.add(review)
        db.session.commit()
        return review

    def get_average_rating(self, product_id):
        average = db.session.query(func.avg(Review.rating)).filter(
            Review.product_id == product_id
        ).scalar()
        return float(average) if average is not None else 0

    # Contact operations

    def get_contacts_by_farmer(self, farmer_id):
        contacts = Contact.query.options(
            joinedload(Contact.buyer), joinedload(Contact.product)
        ).filter_by(farmer_id=farmer_id).order_by(Contact.created_at.desc(), Contact.id.desc()).all()

        results = []
        for contact in contacts:
            item = contact.to_dict()
            item['buyer'] = contact.buyer.to_summary()
            item['product'] = {'id': contact.product.id, 'name': contact.product.name}
            results.append(item)
        return results

    def create_contact(self, data):
        product = self.get_product(data['product_id'])
        if product is None:
            raise NotFoundError('Produit non trouvé')
        if self.get_user(data['buyer_id']) is None:
            raise ValidationFailed('Acheteur non trouvé')

        contact = Contact(farmer_id=product.farmer_id, status='pending', **data)
        db.session.add(contact)
        db.session.commit()
        return contact

    def update_contact(self, contact_id, data):
        contact = db.session.get(Contact, contact_id)
        if contact is None:
            raise NotFoundError('Demande de contact non trouvée')

        data = dict(data)
        status = data.pop('status', None)
        if status and CONTACT_STATUSES.index(status) < CONTACT_STATUSES.index(contact.status):
            raise ValidationFailed('Changement de statut non autorisé')
        if status:
            contact.status = status

        _apply(contact, data)
        db.session.commit()
        return contact

    # Statistics

    def get_stats(self):
        total_farmers = User.query.filter_by(user_type='farmer').count()
        total_products = Product.query.filter_by(is_active=True, is_approved=True).count()
        total_orders = Order.query.count()
        total_provinces = db.session.query(func.count(func.distinct(Product.province))).scalar()

        return {
            'totalFarmers': total_farmers,
            'totalProducts': total_products,
            'totalOrders': total_orders,
            'totalProvinces': total_provinces or 0,
        }


storage = Storage()
