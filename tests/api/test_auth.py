"""
Tests for session and expense API endpoints.
"""

from decimal import Decimal


class TestLogin:

    def test_login_success(self, client):
        response = client.post("/auth/login", json={"username": "admin", "password": "123"})

        assert response.status_code == 200
        data = response.json()
        assert data["active"] is True
        assert data["user"] == {"id": "u1", "name": "System Admin", "role": "ADMIN"}

    def test_login_failure_returns_401(self, client):
        response = client.post("/auth/login", json={"username": "admin", "password": "nope"})

        assert response.status_code == 401
        assert client.get("/auth/session").json()["active"] is False

    def test_blank_credentials_return_422(self, client):
        response = client.post("/auth/login", json={"username": "", "password": ""})
        assert response.status_code == 422

    def test_session_after_login(self, client):
        client.post("/auth/login", json={"username": "cashier", "password": "pos123"})

        data = client.get("/auth/session").json()

        assert data["active"] is True
        assert data["user"]["role"] == "CASHIER"

    def test_logout(self, client):
        client.post("/auth/login", json={"username": "admin", "password": "123"})

        response = client.post("/auth/logout")

        assert response.json()["active"] is False
        assert client.get("/auth/session").json()["active"] is False

    def test_login_logs(self, client):
        client.post("/auth/login", json={"username": "ghost", "password": "x"})
        client.post("/auth/login", json={"username": "sales", "password": "sales123"})

        logs = client.get("/auth/logs").json()

        assert [e["status"] for e in logs] == ["SUCCESS", "FAILED"]
        assert logs[0]["userName"] == "Floor Salesman"
        assert logs[1]["userName"] == "ghost"
        assert logs[1]["role"] is None


class TestExpenses:

    def test_record_expense(self, client):
        response = client.post("/expenses", json={
            "category": "Electricity",
            "description": "March bill",
            "amount": "12000",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("EXP-")
        assert Decimal(data["amount"]) == Decimal("12000")

    def test_zero_amount_returns_422(self, client):
        response = client.post("/expenses", json={"category": "Rent", "amount": "0"})
        assert response.status_code == 422

    def test_list_expenses_newest_first(self, client):
        client.post("/expenses", json={"category": "Rent", "amount": "100"})
        client.post("/expenses", json={"category": "Marketing", "amount": "50"})

        data = client.get("/expenses").json()

        assert [e["category"] for e in data] == ["Marketing", "Rent"]
