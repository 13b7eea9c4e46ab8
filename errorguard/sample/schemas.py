"""Pydantic schemas for sample API payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict


class CreateUserRequest(BaseModel):
    """Payload to register a user; checked by hand to collect every field error."""

    email: str = ""
    name: str = ""
    password: str = ""


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    is_email_verified: bool
    created_at: datetime


class CreateProductRequest(BaseModel):
    name: str = ""
    price: float = 0
    stock: int = 0


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    stock: int


class PurchaseResponse(BaseModel):
    message: str
    remaining_stock: int


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginUser(BaseModel):
    id: int
    email: str
    name: str


class LoginResponse(BaseModel):
    message: str
    token: str
    user: LoginUser
