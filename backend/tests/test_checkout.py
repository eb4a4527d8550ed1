import os
from datetime import date
from types import SimpleNamespace

import pytest
from filelock import FileLock

from storefront.adapters.mock_gateway import MockCheckoutGateway
from storefront.db import SessionLocal, init_db
from storefront.models.product import Product
from storefront.models.transaction import Transaction
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService, _lock_dir, parse_amount
from storefront.services.exceptions import (
    CheckoutInProgressError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture(scope="module", autouse=True)
def setup_db():
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


def line(name, price, quantity):
    return SimpleNamespace(name=name, price=price, quantity=quantity)


def make_service(db):
    return CheckoutService(db, gateway=MockCheckoutGateway(delay_ms=0))


def test_checkout_totals_and_status(db):
    svc = make_service(db)
    cart = [line("Undangan Hardcover Mewah", 5000, 100), line("Kartu Nama Bisnis", 35000, 2)]
    tx = svc.checkout(cart, "Budi", "Jl. Melati 45", "20000", "100000")
    # subtotal 570000, discount 20000
    assert tx.total_amount == 550000
    assert tx.discount == 20000
    assert tx.paid_amount == 100000
    assert tx.status == "DP"
    assert tx.date == date.today()
    assert [(it.name, it.quantity, it.price) for it in tx.items] == [
        ("Undangan Hardcover Mewah", 100, 5000),
        ("Kartu Nama Bisnis", 2, 35000),
    ]
    assert db.query(Transaction).filter(Transaction.id == tx.id).first() is not None


def test_checkout_is_deterministic_but_ids_are_unique(db):
    svc = make_service(db)
    cart = [line("Buku Yasin Custom", 12000, 50)]
    a = svc.checkout(cart, "Ahmad", "Bogor", "", "600000")
    b = svc.checkout(cart, "Ahmad", "Bogor", "", "600000")
    assert (a.total_amount, a.status) == (b.total_amount, b.status) == (600000, "Lunas")
    assert a.id != b.id
    assert a.id.startswith("TRX-") and a.id.endswith(str(date.today().year))


def test_checkout_clamps_discount_and_payment(db):
    svc = make_service(db)
    cart = [line("X-Banner Standing", 85000, 1)]
    tx = svc.checkout(cart, "PT Maju", "Kuningan", 100000, -50)
    assert tx.total_amount == 0
    assert tx.paid_amount == 0
    assert tx.status == "Lunas"

    tx = svc.checkout(cart, "PT Maju", "Kuningan", -10, None)
    assert tx.total_amount == 85000
    assert tx.discount is None
    assert tx.status == "Pending"


@pytest.mark.parametrize(
    "name,address,items",
    [
        ("", "Bandung", [line("A", 1, 1)]),
        ("Rian", "   ", [line("A", 1, 1)]),
        ("Rian", "Bandung", []),
    ],
)
def test_checkout_validation_creates_nothing(db, name, address, items):
    before = db.query(Transaction).count()
    with pytest.raises(ValidationError):
        make_service(db).checkout(items, name, address)
    assert db.query(Transaction).count() == before


def test_checkout_rejects_malformed_amounts(db):
    with pytest.raises(ValidationError):
        make_service(db).checkout([line("A", 1000, 1)], "Rian", "Bandung", "sepuluh", "")


def test_parse_amount():
    assert parse_amount(None, "x") == 0
    assert parse_amount("", "x") == 0
    assert parse_amount(" 2500 ", "x") == 2500
    assert parse_amount(7, "x") == 7


def test_checkout_cart_clears_cart_and_leaves_stock(db):
    carts = CartService(db)
    cart = carts.get_or_create_cart_for_guest()
    carts.add_item(cart, "1", 3)
    carts.add_item(cart, "1", 2)
    stock_before = db.get(Product, "1").stock

    tx = make_service(db).checkout_cart(cart.cart_uuid, "Sari", "Serpong", "0", "25000")
    assert tx.total_amount == 25000
    assert tx.items[0].quantity == 5
    assert tx.status == "Lunas"

    db.expire_all()
    assert carts.get_or_create_cart_for_guest(cart.cart_uuid).items == []
    assert db.get(Product, "1").stock == stock_before


def test_checkout_cart_failed_validation_keeps_cart(db):
    carts = CartService(db)
    cart = carts.get_or_create_cart_for_guest()
    carts.add_item(cart, "2", 1)
    with pytest.raises(ValidationError):
        make_service(db).checkout_cart(cart.cart_uuid, "", "", None, None)
    db.expire_all()
    assert len(carts.get_or_create_cart_for_guest(cart.cart_uuid).items) == 1


def test_checkout_cart_unknown_cart(db):
    with pytest.raises(NotFoundError):
        make_service(db).checkout_cart("missing", "A", "B")


def test_second_checkout_of_same_cart_is_refused(db):
    carts = CartService(db)
    cart = carts.get_or_create_cart_for_guest()
    carts.add_item(cart, "3", 1)
    held = FileLock(os.path.join(_lock_dir(), f"checkout_{cart.cart_uuid}.lock"))
    with held:
        with pytest.raises(CheckoutInProgressError):
            make_service(db).checkout_cart(cart.cart_uuid, "A", "B")
    tx = make_service(db).checkout_cart(cart.cart_uuid, "A", "B")
    assert tx.total_amount == 35000
