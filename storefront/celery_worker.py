# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, RECONCILE_AFTER_SECONDS

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski importowane explicite, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "storefront.tasks.reconcile",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "reconcile-charges": {
        "task": "storefront.tasks.reconcile.reconcile_charges_task",
        "schedule": float(RECONCILE_AFTER_SECONDS),
    },
}

celery_app.conf.timezone = "UTC"
