import time

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.exceptions import NotFound, ValidationFailure
from storefront.domain.permissions import Permission, has_permission
from storefront.domain.schemas import SignupIn, SigninIn, ResetPasswordIn
from storefront.repos.user_repo import UserRepo
from storefront.services.notification_service import NotificationService
from storefront.services.security import hash_password, verify_password, new_reset_token
from storefront.utils.settings import RESET_TOKEN_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_ADMIN_ROLES = [Permission.ADMIN, Permission.PERMISSIONUPDATE]


class UserService:
    def __init__(self, db: Session, notifications: NotificationService | None = None):
        self.repo = UserRepo(db)
        self.notifications = notifications or NotificationService()

    # ---------- konto ----------

    def signup(self, payload: SignupIn) -> UserModel:
        email = payload.email.lower()
        if self.repo.get_user_by_email(email):
            raise ValidationFailure(f"An account for {email} already exists")

        user = UserModel(
            name=payload.name,
            email=email,
            password=hash_password(payload.password),
            permissions=[Permission.USER.value],
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            self.repo.rollback()
            raise ValidationFailure(f"An account for {email} already exists")

        logger.info(f"User {created.id} signed up")
        return created

    def signin(self, payload: SigninIn) -> UserModel:
        email = payload.email.lower()
        user = self.repo.get_user_by_email(email)
        if not user:
            raise NotFound("user", email=email)

        if not verify_password(payload.password, user.password):
            raise ValidationFailure("Invalid password!")

        return user

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("user", id=user_id)
        return user

    def request_reset(self, email: str) -> None:
        email = email.lower()
        user = self.repo.get_user_by_email(email)
        if not user:
            raise NotFound("user", email=email)

        reset_token = new_reset_token()
        self.repo.update_user(
            user,
            reset_token=reset_token,
            reset_token_expiry=int(time.time()) + RESET_TOKEN_TTL_SECONDS,
        )

        # mail nie blokuje requestu, wynik tylko logujemy
        if not self.notifications.send_reset_email(user.email, reset_token):
            logger.warning(f"Reset token for user {user.id} stored but email was not enqueued")

    def reset_password(self, payload: ResetPasswordIn) -> UserModel:
        if payload.password != payload.confirm_password:
            raise ValidationFailure("Your passwords don't match")

        user = self.repo.get_user_by_reset_token(payload.reset_token, now=int(time.time()))
        if not user:
            raise ValidationFailure("This token is either invalid or expired!")

        updated = self.repo.update_user(
            user,
            password=hash_password(payload.password),
            reset_token=None,
            reset_token_expiry=None,
        )
        logger.info(f"User {updated.id} reset their password")
        return updated

    # ---------- administracja ----------

    def list_users(self, current_user) -> list[UserModel]:
        has_permission(current_user, _ADMIN_ROLES)
        return self.repo.list_users()

    def update_permissions(self, current_user, user_id: int, permissions: list[Permission]) -> UserModel:
        has_permission(current_user, _ADMIN_ROLES)

        target = self.get_user(user_id)
        # kolejnosc zachowana, bez duplikatow
        tokens = list(dict.fromkeys(Permission(p).value for p in permissions))
        updated = self.repo.update_user(target, permissions=tokens)
        logger.info(f"User {current_user.id} set permissions of user {user_id} to {tokens}")
        return updated
