# storefront/repos/charge_repo.py
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from storefront.data.models.charge import ChargeRecordModel
from storefront.utils.retry import db_retry

PENDING = "PENDING"
CHARGED = "CHARGED"
FULFILLED = "FULFILLED"
FAILED = "FAILED"


class ChargeRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_pending(
        self,
        user_id: int,
        idempotency_key: str,
        amount: int,
        currency: str,
        snapshot: list[dict],
    ) -> ChargeRecordModel:
        record = ChargeRecordModel(
            user_id=user_id,
            idempotency_key=idempotency_key,
            amount=amount,
            currency=currency,
            status=PENDING,
            snapshot=snapshot,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_record(self, record_id: int) -> ChargeRecordModel | None:
        return self.db.get(ChargeRecordModel, record_id)

    def mark_failed(self, record: ChargeRecordModel) -> None:
        record.status = FAILED
        self.db.commit()

    @db_retry()
    def mark_charged(self, record: ChargeRecordModel, charge_id: str, amount: int) -> None:
        """Pieniadze juz pobrane, commit ponawiany zanim checkout sie podda."""
        try:
            record.status = CHARGED
            record.charge_id = charge_id
            # kwota potwierdzona przez providera
            record.amount = amount
            self.db.commit()
        except OperationalError:
            self.db.rollback()
            raise

    def mark_fulfilled(self, record: ChargeRecordModel, order_id: int) -> None:
        """Bez commita, czesc transakcji tworzenia zamowienia."""
        record.status = FULFILLED
        record.order_id = order_id
        self.db.flush()

    def list_unfulfilled(self, older_than: datetime) -> list[ChargeRecordModel]:
        return list(
            self.db.execute(
                select(ChargeRecordModel)
                .where(
                    ChargeRecordModel.status == CHARGED,
                    ChargeRecordModel.updated_at < older_than,
                )
                .order_by(ChargeRecordModel.id)
            ).scalars().all()
        )

    def list_stale_pending(self, older_than: datetime) -> list[ChargeRecordModel]:
        return list(
            self.db.execute(
                select(ChargeRecordModel)
                .where(
                    ChargeRecordModel.status == PENDING,
                    ChargeRecordModel.updated_at < older_than,
                )
                .order_by(ChargeRecordModel.id)
            ).scalars().all()
        )
