from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, JSON
from datetime import datetime, timezone

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class ChargeRecordModel(Base):
    """
    Zapis kazdej proby obciazenia, tworzony przed wywolaniem providera.
    PENDING -> CHARGED -> FULFILLED albo PENDING -> FAILED.
    Rekord CHARGED bez zamowienia podejmuje zadanie reconcile.
    """

    __tablename__ = "charge_records"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    idempotency_key = Column(String, nullable=False, unique=True)
    amount = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)

    status = Column(String, nullable=False, default="PENDING", index=True)
    charge_id = Column(String, nullable=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True)

    # linie koszyka z chwili checkoutu (lacznie z id cart items)
    snapshot = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)
