"""Product API routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from sqlalchemy.orm import Session

from errorguard.sample.db.base import get_db_session
from errorguard.sample.schemas import CreateProductRequest
from errorguard.sample.schemas import ProductResponse
from errorguard.sample.schemas import PurchaseResponse
from errorguard.sample.services.products import create_product_service
from errorguard.sample.services.products import get_product_service
from errorguard.sample.services.products import list_products_service
from errorguard.sample.services.products import purchase_product_service

router = APIRouter(prefix="/api", tags=["products"])


@router.get("/products", response_model=list[ProductResponse])
def list_products_endpoint(session: Session = Depends(get_db_session)) -> list[ProductResponse]:
    """List catalog products."""
    return list_products_service(session)


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product_endpoint(product_id: int, session: Session = Depends(get_db_session)) -> ProductResponse:
    """Get a single product by id."""
    return get_product_service(session, product_id)


@router.post("/products", response_model=ProductResponse, status_code=201)
def create_product_endpoint(
    payload: CreateProductRequest,
    response: Response,
    session: Session = Depends(get_db_session),
) -> ProductResponse:
    """Add a product to the catalog."""
    product = create_product_service(session, payload)
    response.headers["Location"] = f"/api/products/{product.id}"
    return product


@router.post("/products/{product_id}/purchase", response_model=PurchaseResponse)
def purchase_product_endpoint(
    product_id: int,
    quantity: int,
    session: Session = Depends(get_db_session),
) -> PurchaseResponse:
    """Buy units of a product."""
    product = purchase_product_service(session, product_id, quantity)
    return PurchaseResponse(
        message=f"Successfully purchased {quantity} units of {product.name}",
        remaining_stock=product.stock,
    )
