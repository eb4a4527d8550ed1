import importlib
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.config import settings
from storefront.utils.log import get_logger

log = get_logger("storefront.db", prefix="db")

DATABASE_URL = settings.DATABASE_URL


def _make_engine(url: str):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # an in-memory database only lives as long as its single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, future=True, echo=False, **kwargs)
    return create_engine(url, future=True, echo=False)


engine = _make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

MODEL_MODULES = [
    "storefront.models.product",
    "storefront.models.category",
    "storefront.models.cart",
    "storefront.models.cart_item",
    "storefront.models.transaction",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema and seed the demo catalog.

    Behavior:
      - If `reset` is true or RESET_DB env var is set to 1/true/yes, drop & recreate tables.
      - Otherwise, leave existing tables in place.
      - When settings.SEED_DEMO_DATA is on, seed categories, products and the
        sample transactions into empty tables.

    All model modules are imported first so metadata is populated.
    """
    env_reset = os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")

    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset or env_reset:
        log.info("Resetting database...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized.")

    if settings.SEED_DEMO_DATA:
        from storefront.db.seed_data import seed_demo_data

        s = SessionLocal()
        try:
            created = seed_demo_data(s)
            s.commit()
            if created:
                log.info(f"Seeded {created} demo records.")
        finally:
            s.close()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
