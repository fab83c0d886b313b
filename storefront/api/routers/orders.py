# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_lock_service, get_payment_client, require_user
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.exceptions import StorefrontError
from storefront.domain.schemas import CheckoutIn, OrderOut
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService
from storefront.services.payment_client import PaymentClient

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: CheckoutIn,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
    payment_client: PaymentClient = Depends(get_payment_client),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Checkout koszyka zalogowanego uzytkownika.
    Kwota liczona na serwerze, z requestu brany jest tylko token platnosci.
    """
    svc = OrderService(db, payment_client=payment_client, lock_service=lock_service)
    try:
        return svc.create_order(user.id, payload.token)
    except StorefrontError as e:
        raise to_http(e)


@router.get("/", response_model=List[OrderOut])
def list_orders(user: UserModel = Depends(require_user), db: Session = Depends(get_db)):
    return OrderService(db).list_orders(user.id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
):
    """
    Pobiera szczegoly zamowienia.
    """
    try:
        return OrderService(db).get_order(order_id, user)
    except StorefrontError as e:
        raise to_http(e)
