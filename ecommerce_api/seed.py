"""
Populate an empty database with demo accounts, catalog, orders and reviews

Run with ``python -m ecommerce_api.seed``. Does nothing when the admin
account already exists.
"""
import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from ecommerce_api.database import SessionLocal, atomic, init_db
from ecommerce_api.logging_config import setup_logging
from ecommerce_api.models import Category, Order, OrderItem, OrderStatus, Product, Review, Role, User
from ecommerce_api.security import hash_password

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin@12345"
USER_EMAIL = "user@example.com"
USER_PASSWORD = "User@12345"

# slug -> (name, description, parent slug)
CATEGORIES = {
    "electronics": ("Electronics", "Electronic devices and gadgets", None),
    "smartphones": ("Smartphones", "Mobile phones and accessories", "electronics"),
    "laptops": ("Laptops", "Portable computers", "electronics"),
    "clothing": ("Clothing", "Clothes and accessories", None),
    "men-clothing": ("Men's clothing", "Clothing for men", "clothing"),
}

# slug -> (name, description, price, stock, category slug, images)
PRODUCTS = {
    "iphone-15-pro": (
        "iPhone 15 Pro", "Apple flagship smartphone with the A17 Pro chip", "99999.00", 49, "smartphones",
        ["https://example.com/iphone15pro-1.jpg", "https://example.com/iphone15pro-2.jpg"],
    ),
    "samsung-s24-ultra": (
        "Samsung Galaxy S24 Ultra", "Premium Samsung smartphone with S Pen", "89999.00", 30, "smartphones",
        ["https://example.com/s24-1.jpg"],
    ),
    "macbook-pro-16": (
        'MacBook Pro 16"', "M3 Max laptop for professionals", "299999.00", 14, "laptops",
        ["https://example.com/mbp16-1.jpg", "https://example.com/mbp16-2.jpg"],
    ),
    "dell-xps-15": (
        "Dell XPS 15", "Thin and powerful laptop for work and creativity", "149999.00", 20, "laptops",
        ["https://example.com/xps15.jpg"],
    ),
    "classic-tshirt": (
        "Classic T-shirt", "Basic cotton t-shirt", "1999.00", 99, "men-clothing", [],
    ),
    "slim-fit-jeans": (
        "Slim Fit Jeans", "Stylish slim jeans", "4999.00", 60, "men-clothing",
        ["https://example.com/jeans.jpg"],
    ),
}

# (status, [(product slug, quantity)]); stock above already excludes these
ORDERS = [
    (OrderStatus.DELIVERED, [("iphone-15-pro", 1), ("classic-tshirt", 1)]),
    (OrderStatus.PROCESSING, [("macbook-pro-16", 1)]),
]

# product slug -> (rating, comment)
REVIEWS = {
    "iphone-15-pro": (5, "Great phone! The camera is incredible."),
    "classic-tshirt": (4, "Good fabric quality, true to size."),
}


def seed(db: Session) -> bool:
    """
    Insert the demo data set in one transaction

    Returns:
        False if the database was already seeded, True otherwise
    """
    if db.query(User).filter(User.email == ADMIN_EMAIL).first():
        logger.info("Database already seeded, skipping")
        return False

    with atomic(db):
        admin = User(
            email=ADMIN_EMAIL,
            password=hash_password(ADMIN_PASSWORD),
            first_name="Admin",
            last_name="User",
            date_of_birth=date(1990, 1, 1),
            role=Role.ADMIN,
        )
        customer = User(
            email=USER_EMAIL,
            password=hash_password(USER_PASSWORD),
            first_name="John",
            last_name="Doe",
            date_of_birth=date(1995, 5, 15),
            role=Role.USER,
        )
        db.add_all([admin, customer])

        categories = {}
        for slug, (name, description, parent_slug) in CATEGORIES.items():
            categories[slug] = Category(
                name=name,
                slug=slug,
                description=description,
                parent=categories.get(parent_slug),
            )
        db.add_all(categories.values())

        products = {}
        for slug, (name, description, price, stock, category_slug, images) in PRODUCTS.items():
            products[slug] = Product(
                name=name,
                slug=slug,
                description=description,
                price=Decimal(price),
                stock=stock,
                category=categories[category_slug],
                images=images,
            )
        db.add_all(products.values())

        for status, lines in ORDERS:
            items = [
                OrderItem(product=products[slug], quantity=quantity, price=products[slug].price)
                for slug, quantity in lines
            ]
            db.add(Order(
                user=customer,
                status=status,
                total_price=sum(item.price * item.quantity for item in items),
                items=items,
            ))

        for slug, (rating, comment) in REVIEWS.items():
            db.add(Review(user=customer, product=products[slug], rating=rating, comment=comment))

    logger.info(
        "Seeded %d categories, %d products, %d orders; accounts: %s / %s, %s / %s",
        len(CATEGORIES), len(PRODUCTS), len(ORDERS),
        ADMIN_EMAIL, ADMIN_PASSWORD, USER_EMAIL, USER_PASSWORD,
    )
    return True


def main() -> None:
    setup_logging()
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
