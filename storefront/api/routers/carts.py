# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.exceptions import StorefrontError
from storefront.domain.schemas import CartItemOut, CartOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=CartOut)
def get_cart(user: UserModel = Depends(require_user), db: Session = Depends(get_db)):
    return CartService(db).get_cart(user.id)


@router.post("/items/{item_id}", response_model=CartItemOut)
def add_to_cart(
    item_id: int,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        return CartService(db).add_to_cart(user.id, item_id)
    except StorefrontError as e:
        raise to_http(e)


@router.delete("/items/{cart_item_id}", response_model=CartItemOut)
def remove_from_cart(
    cart_item_id: int,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        return CartService(db).remove_from_cart(user.id, cart_item_id)
    except StorefrontError as e:
        raise to_http(e)
