"""Database models for Agri-Connect RDC."""
import json
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from agriconnect import db


def _isoformat(value):
    return value.isoformat() if value else None


def _money(value):
    """Render a Numeric(10, 2) column the way the client expects: '2500.00'."""
    if value is None:
        return None
    return '{:.2f}'.format(value)


class User(db.Model):
    """User model for farmers, buyers and admins."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.Text, nullable=False)  # werkzeug hash
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20))
    user_type = db.Column(db.String(20), nullable=False)  # farmer, buyer, admin
    location = db.Column(db.String(255))
    profile_image = db.Column(db.Text)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def set_password(self, password):
        """Set hashed password."""
        self.password = generate_password_hash(password)

    def check_password(self, password):
        """Check password against hash."""
        if self.password:
            return check_password_hash(self.password, password)
        return False

    def to_dict(self):
        """Serialize without the password hash."""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'phone': self.phone,
            'userType': self.user_type,
            'location': self.location,
            'profileImage': self.profile_image,
            'isActive': self.is_active,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }

    def to_summary(self, *fields):
        """Public subset embedded in products, orders, reviews and contacts."""
        full = {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'phone': self.phone,
            'email': self.email,
        }
        if not fields:
            return full
        return {key: full[key] for key in fields}

    def __repr__(self):
        return f'<User {self.username}>'


class Product(db.Model):
    """Farm produce listed by a farmer."""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    farmer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(100), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    unit = db.Column(db.String(50), nullable=False)  # kg, piece, bag, etc.
    quantity = db.Column(db.Integer, nullable=False)
    available_quantity = db.Column(db.Integer, nullable=False)
    sale_mode = db.Column(db.String(20), nullable=False)  # direct, contact
    location = db.Column(db.String(255), nullable=False)
    province = db.Column(db.String(100), nullable=False)
    images = db.Column(db.Text)  # JSON string of image URLs
    is_active = db.Column(db.Boolean, default=True)
    is_approved = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationship
    farmer = db.relationship('User', backref=db.backref('products', lazy='dynamic'))

    @property
    def image_list(self):
        if not self.images:
            return []
        return json.loads(self.images)

    @image_list.setter
    def image_list(self, urls):
        self.images = json.dumps(list(urls)) if urls else None

    def to_dict(self):
        return {
            'id': self.id,
            'farmerId': self.farmer_id,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'price': _money(self.price),
            'unit': self.unit,
            'quantity': self.quantity,
            'availableQuantity': self.available_quantity,
            'saleMode': self.sale_mode,
            'location': self.location,
            'province': self.province,
            'images': self.image_list,
            'isActive': self.is_active,
            'isApproved': self.is_approved,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Product {self.name}>'


class Order(db.Model):
    """Direct purchase of a product by a buyer."""
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    buyer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    farmer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    total_price = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(50), nullable=False, default='pending')  # pending, confirmed, delivered, cancelled
    delivery_address = db.Column(db.Text)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    buyer = db.relationship('User', foreign_keys=[buyer_id], backref='purchases')
    product = db.relationship(
        'Product', backref=db.backref('orders', cascade='all, delete-orphan')
    )
    farmer = db.relationship('User', foreign_keys=[farmer_id], backref='sales')

    def to_dict(self):
        return {
            'id': self.id,
            'buyerId': self.buyer_id,
            'productId': self.product_id,
            'farmerId': self.farmer_id,
            'quantity': self.quantity,
            'totalPrice': _money(self.total_price),
            'status': self.status,
            'deliveryAddress': self.delivery_address,
            'notes': self.notes,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Order {self.id} - {self.status}>'


class Review(db.Model):
    """Buyer's rating (1-5) of a product."""
    __tablename__ = 'reviews'

    id = db.Column(db.Integer, primary_key=True)
    buyer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    farmer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    buyer = db.relationship('User', foreign_keys=[buyer_id], backref='reviews_written')
    product = db.relationship(
        'Product', backref=db.backref('reviews', cascade='all, delete-orphan')
    )

    def to_dict(self):
        return {
            'id': self.id,
            'buyerId': self.buyer_id,
            'productId': self.product_id,
            'farmerId': self.farmer_id,
            'rating': self.rating,
            'comment': self.comment,
            'createdAt': _isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Review {self.id} - {self.rating}>'


class Contact(db.Model):
    """Buyer inquiry to a farmer about a contact-mode product."""
    __tablename__ = 'contacts'

    id = db.Column(db.Integer, primary_key=True)
    buyer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    farmer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    message = db.Column(db.Text, nullable=False)
    buyer_phone = db.Column(db.String(20))
    status = db.Column(db.String(20), nullable=False, default='pending')  # pending, contacted, completed
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    buyer = db.relationship('User', foreign_keys=[buyer_id], backref='inquiries')
    product = db.relationship(
        'Product', backref=db.backref('contacts', cascade='all, delete-orphan')
    )

    def to_dict(self):
        return {
            'id': self.id,
            'buyerId': self.buyer_id,
            'productId': self.product_id,
            'farmerId': self.farmer_id,
            'message': self.message,
            'buyerPhone': self.buyer_phone,
            'status': self.status,
            'createdAt': _isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Contact {self.id} - {self.status}>'
