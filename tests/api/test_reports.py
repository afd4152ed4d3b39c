"""
Tests for report API endpoints.
"""

from decimal import Decimal

from retail_ledger.services.advisory_service import FALLBACK_MESSAGE


def credit_sale(client):
    return client.post("/transactions/sale", json={
        "items": [{"productId": "1", "quantity": 2}],
        "partyId": "c2",
        "paidAmount": "1000",
    })


class TestDashboard:

    def test_seed_dashboard(self, client):
        data = client.get("/reports/dashboard").json()

        assert Decimal(data["todaysRevenue"]) == 0
        assert Decimal(data["receivables"]) == Decimal("45000")
        assert Decimal(data["payables"]) == Decimal("120000")
        assert Decimal(data["inventoryValue"]) == Decimal("165850")
        assert len(data["dailySales"]) == 7
        assert data["recentTransactions"] == []

    def test_dashboard_after_sale(self, client):
        credit_sale(client)

        data = client.get("/reports/dashboard").json()

        assert Decimal(data["todaysRevenue"]) == Decimal("4500")
        assert Decimal(data["receivables"]) == Decimal("48500")
        assert Decimal(data["netCashPosition"]) == Decimal("1000")
        assert Decimal(data["dailySales"][-1]["sales"]) == Decimal("4500")


class TestProfitAndLoss:

    def test_profit_and_loss(self, client):
        credit_sale(client)
        client.post("/expenses", json={"category": "Rent", "amount": "500"})

        data = client.get("/reports/profit-loss").json()

        assert Decimal(data["sales"]) == Decimal("4500")
        assert Decimal(data["costOfGoods"]) == Decimal("3000")
        assert Decimal(data["netProfit"]) == Decimal("1000")

    def test_csv_download(self, client):
        credit_sale(client)

        response = client.get("/reports/profit-loss.csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="PNL_Statement_')
        lines = response.text.splitlines()
        assert lines[0] == "Store Management - Profit & Loss Statement"
        assert "Net Sales Revenue,Income,4500.00" in lines


class TestInsights:

    def test_insights_fall_back_without_key(self, client):
        response = client.get("/reports/insights")

        assert response.status_code == 200
        assert response.json()["insights"] == FALLBACK_MESSAGE
