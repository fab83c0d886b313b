# storefront/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_item(self, cart_item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, cart_item_id)

    def get_cart_item_for(self, user_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.item_id == item_id,
            )
        ).scalar_one_or_none()

    def get_cart_items(self, user_id: int) -> list[CartItemModel]:
        """Koszyk uzytkownika razem z Item (joined load)."""
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.id)
            ).scalars().unique().all()
        )

    def increment_quantity(self, user_id: int, item_id: int) -> int:
        # UPDATE cart_items SET quantity = quantity + 1 WHERE user_id = ? AND item_id = ?
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.user_id == user_id,
                CartItemModel.item_id == item_id,
            )
            .values(quantity=CartItemModel.quantity + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def insert_cart_item(self, user_id: int, item_id: int) -> CartItemModel:
        """Rzuca IntegrityError jesli rownolegly request wstawil ten sam (user, item)."""
        cart_item = CartItemModel(user_id=user_id, item_id=item_id, quantity=1)
        self.db.add(cart_item)
        self.db.flush()
        return cart_item

    def delete_cart_item(self, cart_item: CartItemModel) -> None:
        self.db.delete(cart_item)
        self.db.commit()

    def delete_cart_items(self, cart_item_ids: list[int]) -> int:
        """Usuwa po id (bez commita). Pozycje dodane pozniej zostaja."""
        if not cart_item_ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id.in_(cart_item_ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def refresh(self, cart_item: CartItemModel) -> CartItemModel:
        self.db.refresh(cart_item)
        return cart_item

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
