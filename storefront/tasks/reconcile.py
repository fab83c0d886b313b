# storefront/tasks/reconcile.py
from datetime import datetime, timezone, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.repos.charge_repo import ChargeRepo
from storefront.services.order_service import OrderService
from storefront.utils.settings import RECONCILE_AFTER_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def reconcile_charges(db: Session, older_than_seconds: int = RECONCILE_AFTER_SECONDS) -> dict:
    """
    Domyka checkouty, w ktorych platnosc przeszla a zamowienie nie powstalo.
    Zamowienie odtwarzane jest ze snapshotu zapisanego w ChargeRecord.
    """
    cutoff = datetime.now(timezone.utc) - timedelta(seconds=older_than_seconds)
    charges = ChargeRepo(db)
    service = OrderService(db)
    stats = {"fulfilled": 0, "failed": 0, "stale_pending": 0}

    records = charges.list_unfulfilled(older_than=cutoff)
    logger.info(f"Found {len(records)} charged records without an order")

    for record in records:
        try:
            order = service.finalize(record)
            stats["fulfilled"] += 1
            logger.info(f"Reconciled charge {record.charge_id} into order {order.id}")
        except SQLAlchemyError as e:
            db.rollback()
            stats["failed"] += 1
            logger.critical(f"Reconcile failed for charge {record.charge_id} (record {record.id}): {e!r}")

    # PENDING po czasie = odpowiedz providera nie dotarla, wymaga recznej weryfikacji
    for record in charges.list_stale_pending(older_than=cutoff):
        stats["stale_pending"] += 1
        logger.critical(
            f"Charge record {record.id} for user {record.user_id} still PENDING "
            f"(idempotency key {record.idempotency_key}), verify with the provider"
        )

    return stats


@celery_app.task(name="storefront.tasks.reconcile.reconcile_charges_task")
def reconcile_charges_task():
    logger.info("Reconcile charges task started")

    db = SessionLocal()
    try:
        return reconcile_charges(db)
    finally:
        db.close()
