"""
Product API routes.

Edits arrive one field at a time and replace the whole record.
"""

from fastapi import APIRouter, Depends, Response
import structlog

from models.auth import User
from models.product import (
    FieldEdit,
    Product,
    ProductCreate,
    ProductListResponse,
)
from services.catalog_service import get_catalog_service
from routes.dependencies import get_current_user
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=ProductListResponse)
async def list_products(user: User = Depends(get_current_user)):
    """List all products in catalog order."""
    try:
        products = get_catalog_service().list_products(user.username)
        return ProductListResponse(data=products, total=len(products))

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=Product, status_code=201)
async def create_product(data: ProductCreate, user: User = Depends(get_current_user)):
    """
    Add a product.

    Raises:
        422: Validation error
    """
    try:
        return get_catalog_service().add_product(user.username, data)

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, user: User = Depends(get_current_user)):
    """
    Get a single product by id.

    Raises:
        404: Product not found
    """
    try:
        return get_catalog_service().get_product(user.username, product_id)

    except Exception as e:
        return handle_error(e)


@router.patch("/{product_id}", response_model=Product)
async def update_product_field(
    product_id: str,
    edit: FieldEdit,
    user: User = Depends(get_current_user)
):
    """
    Edit one field of a product.

    Quantities are clamped: non-numeric or negative input becomes 0.
    A null custom_restock_qty clears the override.

    Raises:
        404: Product not found
        422: Unknown field, invalid category or invalid value
    """
    try:
        return get_catalog_service().update_field(user.username, product_id, edit)

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, user: User = Depends(get_current_user)):
    """
    Delete a product and drop it from the restock selection.

    Raises:
        404: Product not found
    """
    try:
        get_catalog_service().delete_product(user.username, product_id)
        return Response(status_code=204)

    except Exception as e:
        return handle_error(e)
