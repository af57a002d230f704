# retailers/populate_db.py
import os
import random
from datetime import timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from retailers.database import SessionLocal, init_db
from retailers.models.customer import Customer
from retailers.models.legacy_order import LegacyOrder
from retailers.models.product import Product
from retailers.models.users import UserRole
from retailers.services.users import get_user_by_username, register_user
from retailers.utils.dates import utcnow
from retailers.utils.entity_store import EntityStore

# Configuration
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
LEGACY_ORDERS = 10 # Legacy orders spread over the last weeks

SAMPLE_PRODUCTS = [
    ("Wireless Mouse", "Ergonomic 2.4 GHz mouse", Decimal("24.99"), 120),
    ("Mechanical Keyboard", "Tenkeyless, brown switches", Decimal("89.90"), 40),
    ("USB-C Hub", "7-in-1 aluminium hub", Decimal("39.50"), 75),
    ("27\" Monitor", "QHD IPS panel", Decimal("279.00"), 15),
    ("Laptop Stand", "Adjustable height stand", Decimal("19.99"), 200),
    ("Webcam", "1080p with privacy shutter", Decimal("54.00"), 60),
]

SAMPLE_CUSTOMERS = [
    ("Jane", "Doe", "jane", "jane@example.com", "12 Main Road, Cape Town"),
    ("Sipho", "Nkosi", "sipho", "sipho@example.com", "4 Long Street, Durban"),
]
# End Configuration


def populate_database(db: Session) -> dict:
    """Create the admin account and a small legacy catalogue. Safe to run twice."""
    created = {"admin": 0, "products": 0, "customers": 0, "legacy_orders": 0}

    if not get_user_by_username(db, ADMIN_USERNAME):
        register_user(
            db,
            username=ADMIN_USERNAME,
            email=f"{ADMIN_USERNAME}@abcretailers.co.za",
            password=ADMIN_PASSWORD,
            first_name="Store",
            last_name="Administrator",
            role=UserRole.ADMIN,
        )
        created["admin"] = 1

    store = EntityStore(db)
    if store.get_all(Product):
        print("Catalogue already populated, skipping sample data.")
        return created

    products = []
    for name, description, price, stock in SAMPLE_PRODUCTS:
        product = store.add(Product(
            product_name=name,
            description=description,
            price=price,
            stock_available=stock,
            image_url=f"https://picsum.photos/seed/{name.split()[0].lower()}/300/300",
        ))
        products.append(product)
    created["products"] = len(products)

    customers = [
        store.add(Customer(name=n, surname=s, username=u, email=e, shipping_address=a))
        for n, s, u, e, a in SAMPLE_CUSTOMERS
    ]
    created["customers"] = len(customers)

    # Old orders; the first one was saved without prices, as early records were
    now = utcnow()
    for i in range(LEGACY_ORDERS):
        customer = customers[i % len(customers)]
        product = random.choice(products)
        quantity = random.randint(1, 3)
        unit_price = Decimal("0") if i == 0 else product.price
        store.add(LegacyOrder(
            customer_id=customer.row_key,
            username=customer.username,
            product_id=product.row_key,
            product_name=product.product_name,
            order_date=now - timedelta(days=3 * (i + 1)),
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity,
            status=random.choice(["Submitted", "Processing", "Completed"]),
        ))
    created["legacy_orders"] = LEGACY_ORDERS

    print(f"Inserted {created['products']} products, {created['customers']} customers "
          f"and {created['legacy_orders']} legacy orders.")
    return created


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        populate_database(session)
    finally:
        session.close()
