"""Request payload schemas.

Payloads arrive with the client's camelCase keys (``firstName``,
``saleMode``...) and are dumped to the snake_case attribute names used by
the models and the storage layer.
"""
from decimal import Decimal
from typing import ClassVar, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Payload(BaseModel):
    """Base schema: camelCase input, unknown keys dropped."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )

    # On partial updates, fields that may be cleared with null; other nulls are dropped
    clearable: ClassVar[Optional[Tuple[str, ...]]] = None

    def to_data(self):
        """Fields the client actually sent, keyed by attribute name."""
        data = self.model_dump(exclude_unset=True)
        if self.clearable is None:
            return data
        return {
            key: value for key, value in data.items()
            if value is not None or key in self.clearable
        }


# Users

class RegisterPayload(Payload):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r'^[^@\s]+@[^@\s]+$')
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    # Admins are never self-registered
    user_type: Literal['farmer', 'buyer']
    location: Optional[str] = Field(None, max_length=255)
    profile_image: Optional[str] = None


class UserUpdatePayload(Payload):
    """Profile edits; role, email and username are fixed after registration."""
    clearable: ClassVar[Tuple[str, ...]] = ('phone', 'location', 'profile_image')

    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=255)
    profile_image: Optional[str] = None


class LoginPayload(Payload):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# Products

class ProductCreatePayload(Payload):
    farmer_id: int
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    unit: str = Field(..., min_length=1, max_length=50)
    quantity: int = Field(..., ge=0)
    sale_mode: Literal['direct', 'contact']
    location: str = Field(..., min_length=1, max_length=255)
    province: str = Field(..., min_length=1, max_length=100)
    images: Optional[List[str]] = None
    is_active: bool = True


class ProductUpdatePayload(Payload):
    clearable: ClassVar[Tuple[str, ...]] = ('description', 'images')

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    quantity: Optional[int] = Field(None, ge=0)
    available_quantity: Optional[int] = Field(None, ge=0)
    sale_mode: Optional[Literal['direct', 'contact']] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    province: Optional[str] = Field(None, min_length=1, max_length=100)
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @model_validator(mode='after')
    def check_stock(self):
        if (self.quantity is not None and self.available_quantity is not None
                and self.available_quantity > self.quantity):
            raise ValueError('availableQuantity cannot exceed quantity')
        return self


# Orders

class OrderCreatePayload(Payload):
    buyer_id: int
    product_id: int
    quantity: int = Field(..., gt=0)
    delivery_address: Optional[str] = None
    notes: Optional[str] = None


class OrderUpdatePayload(Payload):
    clearable: ClassVar[Tuple[str, ...]] = ('delivery_address', 'notes')

    status: Optional[Literal['pending', 'confirmed', 'delivered', 'cancelled']] = None
    delivery_address: Optional[str] = None
    notes: Optional[str] = None


# Reviews

class ReviewCreatePayload(Payload):
    buyer_id: int
    product_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


# Contacts

class ContactCreatePayload(Payload):
    buyer_id: int
    product_id: int
    message: str = Field(..., min_length=1)
    buyer_phone: Optional[str] = Field(None, max_length=20)


class ContactUpdatePayload(Payload):
    clearable: ClassVar[Tuple[str, ...]] = ('buyer_phone',)

    status: Optional[Literal['pending', 'contacted', 'completed']] = None
    buyer_phone: Optional[str] = Field(None, max_length=20)
