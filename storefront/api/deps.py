# storefront/api/deps.py
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.exceptions import AuthenticationRequired
from storefront.repos.user_repo import UserRepo
from storefront.services.lock_service import LockService
from storefront.services.payment_client import PaymentClient
from storefront.services.security import read_session_token
from storefront.utils.settings import SESSION_COOKIE_NAME


@dataclass(frozen=True)
class RequestContext:
    """Tozsamosc rozwiazana z ciasteczka sesji, zyje tylko w ramach requestu."""

    user_id: int | None
    user: UserModel | None

    @property
    def signed_in(self) -> bool:
        return self.user is not None


def get_context(request: Request, db: Session = Depends(get_db)) -> RequestContext:
    user_id = read_session_token(request.cookies.get(SESSION_COOKIE_NAME))
    if user_id is None:
        return RequestContext(user_id=None, user=None)

    user = UserRepo(db).get_user(user_id)
    if user is None:
        return RequestContext(user_id=None, user=None)
    return RequestContext(user_id=user.id, user=user)


def require_user(ctx: RequestContext = Depends(get_context)) -> UserModel:
    if not ctx.signed_in:
        raise to_http(AuthenticationRequired())
    return ctx.user


def get_payment_client() -> PaymentClient:
    return PaymentClient()


def get_lock_service() -> LockService:
    return LockService()
