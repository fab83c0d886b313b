from sqlalchemy.orm import Session

from storefront.data.models.item import ItemModel
from storefront.domain.exceptions import NotFound, ValidationFailure
from storefront.domain.permissions import Permission, has_permission
from storefront.domain.schemas import ItemCreate, ItemUpdate
from storefront.repos.item_repo import ItemRepo
from storefront.utils.settings import PER_PAGE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ItemService:
    def __init__(self, db: Session, per_page: int = PER_PAGE):
        self.repo = ItemRepo(db)
        self.per_page = per_page

    def get_item(self, item_id: int) -> ItemModel:
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFound("item", id=item_id)
        return item

    def list_items(self, page: int = 1, search: str | None = None) -> list[ItemModel]:
        if page < 1:
            raise ValidationFailure("Page must be 1 or greater", details={"page": page})
        skip = (page - 1) * self.per_page
        return self.repo.list_items(skip=skip, limit=self.per_page, search=search)

    def count_items(self, search: str | None = None) -> int:
        return self.repo.count_items(search=search)

    def create_item(self, user, payload: ItemCreate) -> ItemModel:
        item = self.repo.create_item(ItemModel(user_id=user.id, **payload.model_dump()))
        logger.info(f"Item {item.id} created by user {user.id}")
        return item

    def update_item(self, user, item_id: int, payload: ItemUpdate) -> ItemModel:
        item = self.get_item(item_id)
        if item.user_id != user.id:
            has_permission(user, [Permission.ADMIN, Permission.ITEMUPDATE])

        updates = payload.model_dump(exclude_unset=True)
        return self.repo.update_item(item, updates)

    def delete_item(self, user, item_id: int) -> ItemModel:
        item = self.get_item(item_id)
        #wlasciciel albo rola ADMIN / ITEMDELETE
        if item.user_id != user.id:
            has_permission(user, [Permission.ADMIN, Permission.ITEMDELETE])

        self.repo.delete_item(item)
        logger.info(f"Item {item_id} deleted by user {user.id}")
        return item
