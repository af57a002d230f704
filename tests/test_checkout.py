from decimal import Decimal

import pytest
from sqlalchemy import event

from retailers.models.cart import CartItem
from retailers.models.order import Order
from retailers.services.cart import add_to_cart, get_user_cart
from retailers.services.orders import NO_ADDRESS, create_orders_from_cart, get_user_orders
from conftest import auth_headers


def fill_cart(db, user, make_product, lines):
    for name, price, qty in lines:
        add_to_cart(db, user.id, make_product(name=name, price=price), qty)


class TestCreateOrdersFromCart:
    def test_single_line_becomes_submitted_order(self, db, customer_user, make_product):
        fill_cart(db, customer_user, make_product, [("Wireless Mouse", "9.99", 2)])

        created = create_orders_from_cart(db, customer_user.id)

        assert created == 1
        orders = get_user_orders(db, customer_user.id)
        assert len(orders) == 1
        order = orders[0]
        assert order.quantity == 2
        assert order.unit_price == Decimal("9.99")
        assert order.total_price == Decimal("19.98")
        assert order.status == "Submitted"
        assert order.shipping_address == "12 Main Road, Cape Town"
        assert get_user_cart(db, customer_user.id) == []

    def test_one_order_per_cart_line(self, db, customer_user, make_product):
        fill_cart(db, customer_user, make_product, [
            ("Wireless Mouse", "9.99", 2),
            ("USB-C Hub", "39.50", 1),
            ("Webcam", "54.00", 3),
        ])

        assert create_orders_from_cart(db, customer_user.id) == 3

        orders = get_user_orders(db, customer_user.id)
        totals = sorted(o.total_price for o in orders)
        assert totals == [Decimal("19.98"), Decimal("39.50"), Decimal("162.00")]
        assert len({o.order_date for o in orders}) == 1

    def test_empty_cart_creates_nothing(self, db, customer_user):
        assert create_orders_from_cart(db, customer_user.id) == 0
        assert db.query(Order).count() == 0

    def test_missing_address_uses_placeholder(self, db, make_user, make_product):
        user = make_user("noaddress", shipping_address=None)
        fill_cart(db, user, make_product, [("Laptop Stand", "19.99", 1)])

        create_orders_from_cart(db, user.id)

        assert get_user_orders(db, user.id)[0].shipping_address == NO_ADDRESS

    def test_other_users_cart_is_untouched(self, db, customer_user, make_user, make_product):
        other = make_user("sipho")
        fill_cart(db, customer_user, make_product, [("Wireless Mouse", "9.99", 1)])
        fill_cart(db, other, make_product, [("Webcam", "54.00", 1)])

        create_orders_from_cart(db, customer_user.id)

        assert len(get_user_cart(db, other.id)) == 1
        assert get_user_orders(db, other.id) == []

    def test_failed_insert_rolls_back_everything(self, db, customer_user, make_product):
        fill_cart(db, customer_user, make_product, [
            ("Wireless Mouse", "9.99", 2),
            ("USB-C Hub", "39.50", 1),
            ("Webcam", "54.00", 3),
        ])
        calls = {"count": 0}

        def fail_on_second_order(mapper, connection, target):
            calls["count"] += 1
            if calls["count"] == 2:
                raise RuntimeError("disk full")

        event.listen(Order, "before_insert", fail_on_second_order)
        try:
            with pytest.raises(RuntimeError, match="disk full"):
                create_orders_from_cart(db, customer_user.id)
        finally:
            event.remove(Order, "before_insert", fail_on_second_order)

        assert db.query(Order).count() == 0
        assert len(get_user_cart(db, customer_user.id)) == 3

    def test_failed_cart_delete_rolls_back_orders(self, db, customer_user, make_product):
        fill_cart(db, customer_user, make_product, [("Wireless Mouse", "9.99", 2)])

        def fail_on_delete(orm_execute_state):
            if orm_execute_state.is_delete:
                raise RuntimeError("lock timeout")

        event.listen(db, "do_orm_execute", fail_on_delete)
        try:
            with pytest.raises(RuntimeError, match="lock timeout"):
                create_orders_from_cart(db, customer_user.id)
        finally:
            event.remove(db, "do_orm_execute", fail_on_delete)

        assert db.query(Order).count() == 0
        assert db.query(CartItem).filter(CartItem.user_id == customer_user.id).count() == 1


class TestCheckoutEndpoint:
    def test_checkout_places_orders(self, client, customer_user, make_product):
        product = make_product(price="9.99")
        headers = auth_headers(customer_user)
        client.post("/cart/add", json={"product_id": product.row_key, "quantity": 2}, headers=headers)

        resp = client.post("/cart/checkout", headers=headers)

        assert resp.status_code == 200
        assert resp.json()["orders_created"] == 1
        history = client.get("/orders", headers=headers).json()
        assert history["has_sql_orders"] is True
        assert history["items"][0]["total_price"] == "19.98"
        assert client.get("/cart", headers=headers).json()["items"] == []

    def test_empty_cart_is_rejected(self, client, customer_user):
        resp = client.post("/cart/checkout", headers=auth_headers(customer_user))
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Your cart is empty"

    def test_admin_cannot_checkout(self, client, admin_user):
        resp = client.post("/cart/checkout", headers=auth_headers(admin_user))
        assert resp.status_code == 403
