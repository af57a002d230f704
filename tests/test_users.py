import pytest

from retailers.models.users import UserRole
from retailers.services.users import (
    DuplicateUserError, authenticate_user, get_user_by_email, list_users, update_last_login
)
from conftest import auth_headers


class TestUserService:
    def test_duplicate_username_and_email(self, make_user):
        make_user("jane")

        with pytest.raises(DuplicateUserError) as exc:
            make_user("jane", email="other@abcmail.co.za")
        assert exc.value.field == "Username"

        with pytest.raises(DuplicateUserError) as exc:
            make_user("jane2", email="JANE@abcmail.co.za")
        assert exc.value.field == "Email"

    def test_authenticate_by_username_or_email(self, db, customer_user):
        assert authenticate_user(db, "jane", "secret123").id == customer_user.id
        assert authenticate_user(db, "Jane@AbcMail.co.za", "secret123").id == customer_user.id
        assert authenticate_user(db, "jane", "wrong") is None
        assert authenticate_user(db, "nobody", "secret123") is None

    def test_inactive_user_cannot_log_in(self, db, customer_user):
        customer_user.is_active = False
        db.commit()
        assert authenticate_user(db, "jane", "secret123") is None

    def test_password_is_hashed(self, customer_user):
        assert customer_user.password_hash != "secret123"

    def test_last_login_is_recorded(self, db, customer_user):
        assert customer_user.last_login_date is None
        update_last_login(db, customer_user.id)
        db.refresh(customer_user)
        assert customer_user.last_login_date is not None

    def test_email_lookup_ignores_case(self, db, customer_user):
        assert get_user_by_email(db, "JANE@ABCMAIL.CO.ZA").id == customer_user.id

    def test_customers_listed_before_admins(self, db, admin_user, customer_user):
        assert [u.role for u in list_users(db)] == [UserRole.CUSTOMER.value, UserRole.ADMIN.value]


class TestAuthEndpoints:
    def register(self, client, **overrides):
        payload = {
            "username": "sipho",
            "email": "sipho@abcmail.co.za",
            "password": "secret123",
            "first_name": "Sipho",
            "last_name": "Nkosi",
            "shipping_address": "4 Long Street, Durban",
        }
        payload.update(overrides)
        return client.post("/register", json=payload)

    def test_register_login_me(self, client):
        resp = self.register(client)
        assert resp.status_code == 201
        assert resp.json()["role"] == "Customer"

        token = client.post("/login", json={"username_or_email": "sipho@abcmail.co.za",
                                            "password": "secret123"}).json()["access_token"]
        me = client.get("/me", headers={"Authorization": f"Bearer {token}"}).json()

        assert me["username"] == "sipho"
        assert me["full_name"] == "Sipho Nkosi"
        assert me["last_login_date"] is not None

    def test_register_duplicate(self, client):
        self.register(client)
        resp = self.register(client, email="new@abcmail.co.za")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Username is already registered"

    def test_short_password_is_invalid(self, client):
        assert self.register(client, password="123").status_code == 422

    def test_bad_login(self, client, customer_user):
        resp = client.post("/login", json={"username_or_email": "jane", "password": "nope"})
        assert resp.status_code == 401

    def test_garbage_token(self, client):
        resp = client.get("/me", headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 401

    def test_users_list_is_admin_only(self, client, admin_user, customer_user):
        assert client.get("/users", headers=auth_headers(customer_user)).status_code == 403
        body = client.get("/users", headers=auth_headers(admin_user)).json()
        assert [u["username"] for u in body] == ["jane", "admin"]
