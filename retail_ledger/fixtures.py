"""
Seed data for a fresh book.

Used whenever the store has no saved snapshot or the saved one
cannot be read back.
"""

from decimal import Decimal

from retail_ledger.models.enums import PartyType, PartySubType, UserRole
from retail_ledger.schemas.inventory import Product
from retail_ledger.schemas.party import Party
from retail_ledger.schemas.snapshot import Snapshot


INITIAL_PRODUCTS = [
    Product(id="1", sku="SKU001", name="Premium Coffee Beans (1kg)", category="Grocery",
            cost_price=Decimal("1500"), retail_price=Decimal("2250"),
            wholesale_price=Decimal("1800"), stock=45, min_stock=10),
    Product(id="2", sku="SKU002", name="Organic Almond Milk (1L)", category="Dairy",
            cost_price=Decimal("350"), retail_price=Decimal("550"),
            wholesale_price=Decimal("480"), stock=120, min_stock=20),
    Product(id="3", sku="SKU003", name="Stainless Steel Whisk", category="Kitchen",
            cost_price=Decimal("450"), retail_price=Decimal("850"),
            wholesale_price=Decimal("650"), stock=15, min_stock=5),
    Product(id="4", sku="SKU004", name="Laundry Pods (30pk)", category="Cleaning",
            cost_price=Decimal("800"), retail_price=Decimal("1450"),
            wholesale_price=Decimal("1100"), stock=60, min_stock=15),
    Product(id="5", sku="SKU005", name="Whole Grain Sourdough", category="Bakery",
            cost_price=Decimal("200"), retail_price=Decimal("450"),
            wholesale_price=Decimal("350"), stock=8, min_stock=5),
]

INITIAL_PARTIES = [
    Party(id="c1", name="Walk-in Customer", type=PartyType.CUSTOMER,
          sub_type=PartySubType.RETAIL, phone="", balance=Decimal("0")),
    Party(id="c2", name="City Cafe Ltd", type=PartyType.CUSTOMER,
          sub_type=PartySubType.WHOLESALE, phone="555-0199", balance=Decimal("45000")),
    Party(id="s1", name="Global Provisions Inc", type=PartyType.SUPPLIER,
          sub_type=PartySubType.WHOLESALE, phone="555-8822", balance=Decimal("-120000")),
]

# Demo staff accounts for StaticIdentityProvider: (username, password, id, name, role)
DEMO_ACCOUNTS = [
    ("admin", "123", "u1", "System Admin", UserRole.ADMIN),
    ("cashier", "pos123", "u2", "Front Desk Cashier", UserRole.CASHIER),
    ("sales", "sales123", "u3", "Floor Salesman", UserRole.SALESMAN),
]


def seed_snapshot() -> Snapshot:
    """A fresh snapshot: fixture products and parties, empty histories."""
    return Snapshot(
        products=[p.model_copy() for p in INITIAL_PRODUCTS],
        parties=[p.model_copy() for p in INITIAL_PARTIES],
    )
