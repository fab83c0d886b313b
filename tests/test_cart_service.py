"""
Tests for storefront/services/cart_service.py
"""
import pytest
from sqlalchemy import select

from storefront.data.models import CartItemModel
from storefront.domain.exceptions import NotFound, OwnershipDenied
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService


def _rows(db, user, item):
    return db.execute(
        select(CartItemModel).where(CartItemModel.user_id == user.id, CartItemModel.item_id == item.id)
    ).scalars().all()


class TestAddToCart:

    def test_first_add_creates_row_with_quantity_one(self, db, make_user, make_item):
        user, item = make_user(), make_item()

        cart_item = CartService(db).add_to_cart(user.id, item.id)

        assert cart_item.quantity == 1
        assert cart_item.item.id == item.id
        assert len(_rows(db, user, item)) == 1

    def test_adding_twice_increments_instead_of_duplicating(self, db, make_user, make_item):
        user, item = make_user(), make_item()
        service = CartService(db)

        service.add_to_cart(user.id, item.id)
        cart_item = service.add_to_cart(user.id, item.id)

        rows = _rows(db, user, item)
        assert len(rows) == 1
        assert rows[0].quantity == 2
        assert cart_item.quantity == 2

    def test_carts_of_different_users_are_separate(self, db, make_user, make_item):
        alice, bob, item = make_user(), make_user(), make_item()
        service = CartService(db)

        service.add_to_cart(alice.id, item.id)
        service.add_to_cart(bob.id, item.id)

        assert _rows(db, alice, item)[0].quantity == 1
        assert _rows(db, bob, item)[0].quantity == 1

    def test_unknown_item_is_not_found(self, db, make_user):
        user = make_user()
        with pytest.raises(NotFound):
            CartService(db).add_to_cart(user.id, 999)

    def test_concurrent_insert_falls_back_to_increment(self, db, make_user, make_item, monkeypatch):
        """Rownolegly add wstawil wiersz miedzy naszym UPDATE a INSERT."""
        user, item = make_user(), make_item()
        service = CartService(db)
        service.add_to_cart(user.id, item.id)

        original = CartRepo.increment_quantity
        calls = {"n": 0}

        def stale_first_increment(self, user_id, item_id):
            calls["n"] += 1
            if calls["n"] == 1:
                return 0
            return original(self, user_id, item_id)

        monkeypatch.setattr(CartRepo, "increment_quantity", stale_first_increment)

        cart_item = service.add_to_cart(user.id, item.id)

        assert calls["n"] == 2
        assert cart_item.quantity == 2
        assert len(_rows(db, user, item)) == 1


class TestRemoveFromCart:

    def test_owner_removes_whole_line(self, db, make_user, make_item, put_in_cart):
        user, item = make_user(), make_item()
        cart_item = put_in_cart(user, item, quantity=3)

        CartService(db).remove_from_cart(user.id, cart_item.id)

        assert _rows(db, user, item) == []

    def test_other_users_cart_item_is_denied_and_kept(self, db, make_user, make_item, put_in_cart):
        owner, intruder, item = make_user(), make_user(), make_item()
        cart_item = put_in_cart(owner, item, quantity=2)

        with pytest.raises(OwnershipDenied):
            CartService(db).remove_from_cart(intruder.id, cart_item.id)

        rows = _rows(db, owner, item)
        assert len(rows) == 1
        assert rows[0].quantity == 2

    def test_missing_cart_item_is_not_found(self, db, make_user):
        user = make_user()
        with pytest.raises(NotFound):
            CartService(db).remove_from_cart(user.id, 12345)


def test_get_cart_computes_total(db, make_user, make_item, put_in_cart):
    user = make_user()
    put_in_cart(user, make_item("A", price=1000), quantity=2)
    put_in_cart(user, make_item("B", price=500), quantity=1)

    cart = CartService(db).get_cart(user.id)

    assert cart["total"] == 2500
    assert [ci.quantity for ci in cart["items"]] == [2, 1]
