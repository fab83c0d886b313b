# storefront/data/seed.py
from storefront.data.database import SessionLocal
from storefront.data.models import ItemModel

SAMPLE_ITEMS = [
    {"title": "Belt", "description": "Leather belt, black", "price": 2000, "image": "belt.jpg"},
    {"title": "Boots", "description": "Winter boots", "price": 12500, "image": "boots.jpg"},
    {"title": "Hat", "description": "Knitted wool hat", "price": 1500, "image": "hat.jpg"},
    {"title": "Shoes", "description": "Running shoes", "price": 8900, "image": "shoes.jpg"},
]


def seed():
    db = SessionLocal()
    try:
        # tylko pusta baza
        if db.query(ItemModel).first():
            return
        db.add_all(ItemModel(**data) for data in SAMPLE_ITEMS)
        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    seed()
