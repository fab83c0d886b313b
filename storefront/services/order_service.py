# storefront/services/order_service.py
import uuid

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.charge import ChargeRecordModel
from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.domain.exceptions import (
    CheckoutInProgress,
    EmptyCart,
    NotFound,
    OrderFinalizationError,
    OwnershipDenied,
    PaymentFailed,
    PaymentOutcomeUnknown,
    UpstreamFailure,
)
from storefront.domain.permissions import Permission, is_allowed
from storefront.repos.cart_repo import CartRepo
from storefront.repos.charge_repo import ChargeRepo, CHARGED, PENDING
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LockService
from storefront.services.payment_client import PaymentClient
from storefront.utils.settings import CURRENCY, CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def snapshot_line(cart_item) -> dict:
    """Kopia pozycji koszyka i pol Item z chwili checkoutu."""
    item = cart_item.item
    return {
        "cart_item_id": cart_item.id,
        "item_id": item.id,
        "title": item.title,
        "description": item.description,
        "image": item.image,
        "large_image": item.large_image,
        "price": item.price,
        "quantity": cart_item.quantity,
    }


def snapshot_total(lines: list[dict]) -> int:
    return sum(line["price"] * line["quantity"] for line in lines)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien: checkout i odczyt zamowien.
    """

    def __init__(
        self,
        db: Session,
        payment_client: PaymentClient | None = None,
        lock_service: LockService | None = None,
        currency: str = CURRENCY,
    ):
        self.db = db
        self.orders = OrderRepo(db)
        self.carts = CartRepo(db)
        self.charges = ChargeRepo(db)
        self.payment_client = payment_client
        self.lock_service = lock_service
        self.currency = currency

    def create_order(self, user_id: int, token: str) -> OrderModel:
        """
        Use Case: checkout koszyka.

        1. Snapshot koszyka (jedyne zrodlo cen)
        2. Przeliczenie sumy po stronie serwera
        3. Obciazenie u providera (rekord ChargeRecord zapisany wczesniej)
        4-6. Zamowienie + kopie pozycji + usuniecie pozycji ze snapshotu, jedna transakcja
        7. Zwrot zamowienia
        """
        owner = self._acquire_checkout_lock(user_id)
        try:
            return self._checkout(user_id, token)
        finally:
            self._release_checkout_lock(user_id, owner)

    def _checkout(self, user_id: int, token: str) -> OrderModel:
        cart_items = self.carts.get_cart_items(user_id)
        if not cart_items:
            raise EmptyCart(user_id)

        lines = [snapshot_line(ci) for ci in cart_items]
        amount = snapshot_total(lines)
        logger.info(f"Checkout for user {user_id}: {len(lines)} lines, charging {amount} {self.currency}")

        record = self.charges.create_pending(
            user_id=user_id,
            idempotency_key=uuid.uuid4().hex,
            amount=amount,
            currency=self.currency,
            snapshot=lines,
        )

        try:
            charge = self.payment_client.create_charge(
                amount=amount,
                currency=self.currency,
                token=token,
                idempotency_key=record.idempotency_key,
            )
        except PaymentFailed:
            #nic nie pobrano, koszyk nietkniety, user moze sprobowac ponownie
            self.charges.mark_failed(record)
            logger.warning(f"Charge for user {user_id} failed, charge record {record.id} marked FAILED")
            raise
        except PaymentOutcomeUnknown:
            #rekord zostaje PENDING, reconcile zglosi go do weryfikacji u providera
            logger.critical(
                f"PAYMENT OUTCOME UNKNOWN: user {user_id}, {amount} {self.currency}, "
                f"charge record {record.id}, idempotency key {record.idempotency_key}"
            )
            raise

        if charge.amount != amount:
            logger.warning(
                f"Provider confirmed {charge.amount} for charge {charge.id}, computed {amount}; "
                f"persisting the confirmed amount"
            )

        record_id, idempotency_key = record.id, record.idempotency_key
        left_as = PENDING
        try:
            self.charges.mark_charged(record, charge.id, charge.amount)
            left_as = CHARGED
            return self.finalize(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            # PENDING = id obciazenia jest tylko tutaj, w logu
            logger.critical(
                f"CHARGED BUT NOT RECORDED: charge {charge.id} ({charge.amount} {self.currency}) "
                f"for user {user_id}, charge record {record_id} left {left_as}, "
                f"idempotency key {idempotency_key}: {e!r}"
            )
            raise OrderFinalizationError(charge.id, record_id, e) from e

    def finalize(self, record: ChargeRecordModel) -> OrderModel:
        """
        Tworzy zamowienie z rekordu CHARGED. Idempotentne po charge id,
        uzywane przez checkout i przez zadanie reconcile.
        """
        existing = self.orders.get_order_by_charge(record.charge_id)
        if existing:
            self.charges.mark_fulfilled(record, existing.id)
            self.db.commit()
            logger.info(f"Order {existing.id} already exists for charge {record.charge_id}")
            return existing

        order = OrderModel(
            user_id=record.user_id,
            total=record.amount,
            charge=record.charge_id,
            items=[
                OrderItemModel(
                    user_id=record.user_id,
                    title=line["title"],
                    description=line["description"],
                    image=line["image"],
                    large_image=line["large_image"],
                    price=line["price"],
                    quantity=line["quantity"],
                )
                for line in record.snapshot
            ],
        )
        self.orders.add_order(order)

        #tylko pozycje ze snapshotu, dodane w trakcie platnosci zostaja
        removed = self.carts.delete_cart_items([line["cart_item_id"] for line in record.snapshot])
        self.charges.mark_fulfilled(record, order.id)
        self.db.commit()

        logger.info(
            f"Order {order.id} created for user {record.user_id}, charge {record.charge_id}, "
            f"total {order.total}, {removed} cart items cleared"
        )
        return order

    def get_order(self, order_id: int, user) -> OrderModel:
        """
        Use Case: pobranie zamowienia (Query).
        """
        order = self.orders.get_order(order_id)

        if not order:
            raise NotFound("order", id=order_id)

        if order.user_id != user.id and not is_allowed(user.permissions or [], [Permission.ADMIN]):
            raise OwnershipDenied("order", order_id, user.id)

        return order

    def list_orders(self, user_id: int) -> list[OrderModel]:
        return self.orders.list_orders(user_id)

    def _acquire_checkout_lock(self, user_id: int) -> str:
        try:
            owner = self.lock_service.acquire_checkout_lock(user_id, ttl=CHECKOUT_LOCK_TTL_SECONDS)
        except RedisError as e:
            logger.error(f"Checkout lock unavailable for user {user_id}: {e}")
            raise UpstreamFailure("Checkout is temporarily unavailable, you have not been charged") from e

        if not owner:
            raise CheckoutInProgress(user_id)
        return owner

    def _release_checkout_lock(self, user_id: int, owner: str) -> None:
        try:
            self.lock_service.release_checkout_lock(user_id, owner)
        except RedisError as e:
            # lock i tak wygasnie po TTL
            logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")
