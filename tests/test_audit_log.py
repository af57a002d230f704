from datetime import timedelta

from retailers.models.log import AuditAction, AuditResource, AuditStatus, Log
from retailers.services.audit_log import order_status_trail, search_logs
from retailers.services.cart import add_to_cart
from retailers.services.orders import create_orders_from_cart, get_user_orders
from retailers.utils.audit import write_log
from retailers.utils.dates import utcnow
from conftest import auth_headers


def place_order(db, user, make_product):
    add_to_cart(db, user.id, make_product(price="9.99"), 1)
    create_orders_from_cart(db, user.id)
    return get_user_orders(db, user.id)[0]


class TestSearchLogs:
    def test_filters_by_resource_action_and_status(self, db, admin_user):
        write_log(db, user_id=admin_user.id, action="ORDER_STATUS_CHANGE", resource="legacy_orders",
                  meta={"order_id": "abc", "old": "Submitted", "new": "Completed", "notified": True})
        write_log(db, user_id=admin_user.id, action="ORDER_STATUS_CHANGE", resource="orders",
                  status="WARNING", meta={"order_id": 1, "old": "Submitted", "new": "Processing",
                                          "notified": False})
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL")

        items, total = search_logs(db, resource=AuditResource.LEGACY_ORDERS)
        assert total == 1 and items[0].meta["order_id"] == "abc"

        items, total = search_logs(db, action=AuditAction.ORDER_STATUS_CHANGE, status=AuditStatus.WARNING)
        assert total == 1 and items[0].resource == "orders"
        assert items[0].username == "admin"

    def test_date_range_is_inclusive(self, db):
        write_log(db, user_id=None, action="LOGIN", resource="auth")
        today = utcnow().date()

        assert search_logs(db, date_from=today, date_to=today)[1] == 1
        assert search_logs(db, date_to=today - timedelta(days=1))[1] == 0
        assert search_logs(db, date_from=today + timedelta(days=1))[1] == 0

    def test_pages_newest_first(self, db):
        for action in ("REGISTER", "LOGIN", "CHECKOUT"):
            write_log(db, user_id=None, action=action, resource="auth")

        items, total = search_logs(db, page=1, page_size=2)

        assert total == 3
        assert [e.action for e in items] == ["CHECKOUT", "LOGIN"]
        assert [e.action for e in search_logs(db, page=2, page_size=2)[0]] == ["REGISTER"]


class TestOrderStatusTrail:
    def test_trail_of_storefront_order(self, client, db, queue, admin_user, customer_user, make_product):
        order = place_order(db, customer_user, make_product)
        headers = auth_headers(admin_user)
        client.patch(f"/orders/{order.id}/status", json={"status": "Processing"}, headers=headers)
        queue.fail = True
        client.patch(f"/orders/{order.id}/status", json={"status": "Completed"}, headers=headers)

        trail = client.get(f"/logs/orders/{order.id}", headers=headers).json()

        assert [(t["previous_status"], t["new_status"]) for t in trail] == [
            ("Submitted", "Processing"), ("Processing", "Completed")]
        assert [t["notified"] for t in trail] == [True, False]
        assert trail[0]["store"] == "sql"
        assert trail[0]["changed_by"] == "admin"

    def test_trail_only_holds_the_requested_order(self, db, admin_user):
        write_log(db, user_id=admin_user.id, action="ORDER_STATUS_CHANGE", resource="legacy_orders",
                  meta={"order_id": "row-1", "old": "Submitted", "new": "Completed", "notified": True})
        write_log(db, user_id=admin_user.id, action="ORDER_STATUS_CHANGE", resource="orders",
                  meta={"order_id": 1, "old": "Submitted", "new": "Cancelled", "notified": True})

        trail = order_status_trail(db, "row-1")

        assert len(trail) == 1
        assert trail[0].store == "legacy"
        assert trail[0].new_status == "Completed"
        assert db.query(Log).count() == 2

    def test_unknown_filter_value_is_rejected(self, client, admin_user):
        resp = client.get("/logs", params={"resource": "warehouse"}, headers=auth_headers(admin_user))
        assert resp.status_code == 422
