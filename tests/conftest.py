import os

# Point the app at an in-memory database before any storefront module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.database import Base, SessionLocal, engine, get_db
from storefront.models import Category, Product

@pytest.fixture(scope="function")
def db():
    # Create test database tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        # Clear database after each test
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
        db.close()

@pytest.fixture(scope="function")
def client(db):
    # Override the get_db dependency
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

@pytest.fixture(scope="function")
def test_categories(db):
    categories = {
        name: Category(name=name)
        for name in ("Rings", "Necklaces", "Bracelets", "Earrings")
    }
    db.add_all(categories.values())
    db.commit()

    for category in categories.values():
        db.refresh(category)

    return categories

@pytest.fixture(scope="function")
def test_products(db, test_categories):
    products = [
        Product(
            name="Gold Wedding Ring",
            description="Classic 22k yellow gold band",
            price=3000,
            stock=5,
            category_id=test_categories["Rings"].id,
            images=["rings/gold-wedding-1.jpg", "rings/gold-wedding-2.jpg"]
        ),
        Product(
            name="Silver Ring",
            description="Sterling silver ring with a thin gold inlay",
            price=2000,
            stock=12,
            category_id=test_categories["Rings"].id,
            images=["rings/silver.jpg"]
        ),
        Product(
            name="Diamond Solitaire Necklace",
            description="Brilliant diamond pendant on a white gold chain",
            price=25000,
            stock=2,
            category_id=test_categories["Necklaces"].id,
            images=["necklaces/solitaire.jpg"]
        ),
        Product(
            name="Diamond Tennis Necklace",
            description="A row of diamonds set in platinum",
            price=60000,
            stock=1,
            category_id=test_categories["Necklaces"].id,
            images=[]
        ),
        Product(
            name="Pearl Bracelet",
            description="Freshwater pearl bracelet with a silver clasp",
            price=4500,
            stock=7,
            category_id=test_categories["Bracelets"].id,
            images=["bracelets/pearl.jpg"]
        ),
        Product(
            name="Rose Gold Earrings",
            description="Delicate rose gold studs",
            price=5500,
            stock=9,
            category_id=test_categories["Earrings"].id,
            images=["earrings/rose-gold.jpg"]
        ),
    ]

    db.add_all(products)
    db.commit()

    for product in products:
        db.refresh(product)

    return products
