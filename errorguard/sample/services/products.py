"""Service helpers for sample catalog operations."""

from __future__ import annotations

from sqlalchemy.orm import Session

from errorguard.core.errors import BadRequestError
from errorguard.core.errors import NotFoundError
from errorguard.core.errors import ValidationError
from errorguard.sample.db.base import database_operation
from errorguard.sample.db.models import Product
from errorguard.sample.db.repository import create_product
from errorguard.sample.db.repository import decrement_stock
from errorguard.sample.db.repository import get_product
from errorguard.sample.db.repository import list_products
from errorguard.sample.errors import InsufficientStockError
from errorguard.sample.schemas import CreateProductRequest


def create_product_service(session: Session, payload: CreateProductRequest) -> Product:
    """Validate and persist a new product."""
    validation = ValidationError()
    if not payload.name.strip():
        validation.add_field_error("Name", "Product name is required")
    if payload.price <= 0:
        validation.add_field_error("Price", "Price must be greater than 0")
    if payload.stock < 0:
        validation.add_field_error("Stock", "Stock cannot be negative")
    if validation.has_errors():
        raise validation

    with database_operation(session, "create product"):
        product = create_product(session, name=payload.name.strip(), price=payload.price, stock=payload.stock)
        session.commit()
    return product


def list_products_service(session: Session) -> list[Product]:
    with database_operation(session, "list products"):
        return list_products(session)


def get_product_service(session: Session, product_id: int) -> Product:
    """Fetch a product or raise not found."""
    with database_operation(session, "load product"):
        product = get_product(session, product_id)
    if product is None:
        raise NotFoundError(f"Product with ID {product_id} not found")
    return product


def purchase_product_service(session: Session, product_id: int, quantity: int) -> Product:
    """Take ``quantity`` units out of stock."""
    if quantity <= 0:
        raise BadRequestError("Quantity must be greater than 0")

    product = get_product_service(session, product_id)
    if product.stock < quantity:
        raise InsufficientStockError(product.name, quantity, product.stock)

    with database_operation(session, "purchase product"):
        product = decrement_stock(session, product, quantity)
        session.commit()
    return product
