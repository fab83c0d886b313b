from sqlalchemy import select, func, or_, delete
from sqlalchemy.orm import Session

from storefront.data.models.item import ItemModel
from storefront.data.models.cart_item import CartItemModel


class ItemRepo:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _search_clause(search: str | None):
        if not search:
            return None
        pattern = f"%{search}%"
        return or_(ItemModel.title.ilike(pattern), ItemModel.description.ilike(pattern))

    def get_item(self, item_id: int) -> ItemModel | None:
        return self.db.get(ItemModel, item_id)

    def list_items(self, skip: int, limit: int, search: str | None = None) -> list[ItemModel]:
        stmt = select(ItemModel)
        clause = self._search_clause(search)
        if clause is not None:
            stmt = stmt.where(clause)
        stmt = stmt.order_by(ItemModel.created_at.desc(), ItemModel.id.desc()).offset(skip).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def count_items(self, search: str | None = None) -> int:
        stmt = select(func.count(ItemModel.id))
        clause = self._search_clause(search)
        if clause is not None:
            stmt = stmt.where(clause)
        return self.db.execute(stmt).scalar_one()

    def create_item(self, item: ItemModel) -> ItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update_item(self, item: ItemModel, updates: dict) -> ItemModel:
        for key, value in updates.items():
            setattr(item, key, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item: ItemModel) -> None:
        #koszyki trzymaja klucz do item, zamowienia maja kopie wiec ich nie ruszamy
        self.db.execute(delete(CartItemModel).where(CartItemModel.item_id == item.id))
        self.db.delete(item)
        self.db.commit()
