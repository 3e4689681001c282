import importlib
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.config import settings
from storefront.utils.log_setup import get_logger

log = get_logger("db")

DATABASE_URL = settings.DATABASE_URL
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# every module defining tables, so metadata is complete before create_all
MODEL_MODULES = [
    "storefront.models.category",
    "storefront.models.product",
    "storefront.models.user",
    "storefront.models.admin",
    "storefront.models.order",
]

# small catalogue so a fresh dev database has something to browse
SEED_CATEGORIES = [
    {"name": "Electronics", "slug": "electronics"},
    {"name": "Home & Kitchen", "slug": "home-kitchen"},
]

SEED_PRODUCTS = [
    {"name": "Wireless Bluetooth Headphones", "slug": "wireless-bluetooth-headphones",
     "price": Decimal("74.99"), "category": "electronics", "brand": "SoundMax", "stock": 25},
    {"name": "Smart Fitness Watch", "slug": "smart-fitness-watch",
     "price": Decimal("64.99"), "category": "electronics", "brand": "FitPro", "stock": 15},
    {"name": "Stainless Steel Water Bottle", "slug": "stainless-steel-water-bottle",
     "price": Decimal("12.50"), "category": "home-kitchen", "brand": "HydroLife", "stock": 40},
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    With reset=True (or RESET_DB set) tables are dropped and recreated.
    Missing seed categories/products are inserted; existing rows are left alone.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset or settings.RESET_DB:
        log.info("Resetting database...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    seed_catalogue()
    log.info("Database initialized.")


def seed_catalogue():
    from storefront.models.category import Category
    from storefront.models.product import Product

    s = SessionLocal()
    try:
        by_slug = {}
        for ent in SEED_CATEGORIES:
            c = s.query(Category).filter(Category.slug == ent["slug"]).first()
            if not c:
                c = Category(name=ent["name"], slug=ent["slug"])
                s.add(c)
                s.flush()
            by_slug[c.slug] = c

        created = 0
        for ent in SEED_PRODUCTS:
            if s.query(Product).filter(Product.slug == ent["slug"]).first():
                continue
            s.add(
                Product(
                    name=ent["name"],
                    slug=ent["slug"],
                    price=ent["price"],
                    category_id=by_slug[ent["category"]].id,
                    brand=ent["brand"],
                    stock=ent["stock"],
                )
            )
            created += 1
        s.commit()
        if created:
            log.info(f"Seeded {created} missing products.")
    finally:
        s.close()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
