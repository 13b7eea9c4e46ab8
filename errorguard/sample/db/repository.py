"""Repository primitives for sample users and products."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from errorguard.sample.db.models import Product
from errorguard.sample.db.models import User


def create_user(session: Session, *, email: str, name: str) -> User:
    """Create and return a user row."""
    user = User(email=email, name=name)
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: int) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    """Fetch a user by email, ignoring case."""
    stmt = select(User).where(func.lower(User.email) == email.strip().lower())
    return session.scalars(stmt).first()


def list_users(session: Session) -> list[User]:
    return list(session.scalars(select(User).order_by(User.id)))


def delete_user(session: Session, user: User) -> None:
    session.delete(user)
    session.flush()


def mark_email_verified(session: Session, user: User) -> User:
    user.is_email_verified = True
    session.flush()
    session.refresh(user)
    return user


def create_product(session: Session, *, name: str, price: float, stock: int) -> Product:
    """Create and return a product row."""
    product = Product(name=name, price=price, stock=stock)
    session.add(product)
    session.flush()
    session.refresh(product)
    return product


def get_product(session: Session, product_id: int) -> Product | None:
    return session.get(Product, product_id)


def list_products(session: Session) -> list[Product]:
    return list(session.scalars(select(Product).order_by(Product.id)))


def decrement_stock(session: Session, product: Product, quantity: int) -> Product:
    product.stock -= quantity
    session.flush()
    session.refresh(product)
    return product


def seed_products(session: Session, rows: Iterable[Mapping[str, Any]]) -> None:
    """Insert seed products when the catalog is empty."""
    if session.scalars(select(Product.id).limit(1)).first() is not None:
        return
    for row in rows:
        session.add(Product(**row))
    session.flush()
