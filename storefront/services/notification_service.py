# storefront/services/notification_service.py
from urllib.parse import urlencode

from storefront.celery_worker import celery_app
from storefront.services.mailer import make_a_nice_email, send_mail
from storefront.utils.settings import FRONTEND_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Wysylka maili przez Celery.
    Fire-and-forget: blad kolejkowania jest logowany i nie przerywa requestu.
    """

    @staticmethod
    def send_reset_email(email: str, reset_token: str) -> bool:
        try:
            send_reset_email_task.delay(email, reset_token)
            return True
        except Exception as e:
            logger.error(f"Could not enqueue password reset email: {e}")
            return False


@celery_app.task(
    name="storefront.services.notification_service.send_reset_email_task",
    autoretry_for=(OSError,),
    retry_backoff=True,
    max_retries=3,
)
def send_reset_email_task(email: str, reset_token: str):
    link = f"{FRONTEND_URL}/reset?{urlencode({'resetToken': reset_token})}"
    send_mail(
        to=email,
        subject="Password Reset Token",
        html=make_a_nice_email(
            f"Your Password Reset Token is here!\n\n<a href=\"{link}\">Click Here to Reset</a>"
        ),
    )
    logger.info("[NOTIFICATION] password reset email sent")
    return {"status": "sent"}
