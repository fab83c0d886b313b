from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.exceptions import NotFound, OwnershipDenied, UpstreamFailure
from storefront.repos.cart_repo import CartRepo
from storefront.repos.item_repo import ItemRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_UPSERT_ATTEMPTS = 3


def cart_total(cart_items) -> int:
    return sum(ci.item.price * ci.quantity for ci in cart_items)


class CartService:
    """
    Use case'y koszyka.
    commands (add, remove) modyfikuja stan, query (get) tylko odczyt.
    user_id pochodzi zawsze z kontekstu requestu (zweryfikowana sesja).
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.items = ItemRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart_items = self.repo.get_cart_items(user_id)
        return {
            "user_id": user_id,
            "items": cart_items,
            "total": cart_total(cart_items),
        }

    #commands
    def add_to_cart(self, user_id: int, item_id: int) -> CartItemModel:
        if not self.items.get_item(item_id):
            raise NotFound("item", id=item_id)

        # upsert po (user, item): najpierw atomowy increment, insert gdy wiersza nie ma;
        # IntegrityError = rownolegly add wstawil wiersz, wiec ponawiamy increment
        for attempt in range(1, _UPSERT_ATTEMPTS + 1):
            if self.repo.increment_quantity(user_id, item_id):
                self.repo.commit()
                logger.info(f"Item {item_id} already in cart of user {user_id}, quantity incremented")
                return self.repo.refresh(self.repo.get_cart_item_for(user_id, item_id))

            try:
                created = self.repo.insert_cart_item(user_id, item_id)
                self.repo.commit()
            except IntegrityError:
                self.repo.rollback()
                logger.info(f"Concurrent add of item {item_id} for user {user_id}, retrying ({attempt})")
                continue

            logger.info(f"Item {item_id} added to cart of user {user_id}")
            return self.repo.refresh(created)

        raise UpstreamFailure(
            "Could not update your cart, please try again",
            details={"user_id": user_id, "item_id": item_id},
        )

    def remove_from_cart(self, user_id: int, cart_item_id: int) -> CartItemModel:
        cart_item = self.repo.get_cart_item(cart_item_id)

        if not cart_item:
            raise NotFound("cart item", id=cart_item_id)

        if cart_item.user_id != user_id:
            raise OwnershipDenied("cart item", cart_item_id, user_id)

        #usuwamy cala pozycje, bez zmniejszania ilosci
        self.repo.delete_cart_item(cart_item)
        logger.info(f"Cart item {cart_item_id} removed from cart of user {user_id}")
        return cart_item
