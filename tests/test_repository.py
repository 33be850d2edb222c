from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError

from tremligeiro.models import Base, Customer, Order, OrderProduct, Payment, Product
from tremligeiro.repository import (
    CustomerRepository,
    OrderProductRepository,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    RecordNotFoundError,
)

T0 = datetime(2024, 1, 1, 8, 0)
T1 = datetime(2024, 1, 2, 8, 0)


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path / 'repo.sqlite'}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


def _order(order_id, status="PENDING", customer_id=None):
    return Order(
        id=order_id,
        customer_id=customer_id,
        status=status,
        total_amount=0.0,
        created_at=T0,
        updated_at=T0,
    )


def _product(product_id, category_id, amount=10.5):
    return Product(
        id=product_id,
        name="Test Product",
        description="Desc",
        category_id=category_id,
        amount=amount,
        created_at=T0,
        updated_at=T0,
    )


def test_record_not_found_message():
    assert str(RecordNotFoundError()) == "record not found"


def test_customer_create_and_find(engine):
    repo = CustomerRepository(engine)
    repo.create(
        Customer(
            id="c1",
            name="Ana",
            document_number="doc-1",
            email="ana@example.com",
            created_at=T0,
            updated_at=T0,
        )
    )
    found = repo.find_one("c1")
    assert found.name == "Ana"
    assert found.email == "ana@example.com"
    by_doc = repo.find_by_document_number("doc-1")
    assert by_doc.id == "c1"


def test_customer_find_one_missing_is_none(engine):
    assert CustomerRepository(engine).find_one("missing") is None


def test_customer_find_by_document_missing_raises(engine):
    with pytest.raises(RecordNotFoundError):
        CustomerRepository(engine).find_by_document_number("missing")


def test_customer_duplicate_create_raises(engine):
    repo = CustomerRepository(engine)
    repo.create(Customer(id="c1", name="A", document_number="d", email="a@example.com"))
    with pytest.raises(IntegrityError):
        repo.create(Customer(id="c1", name="B", document_number="e", email="b@example.com"))


def test_order_create_find_and_find_one(engine):
    repo = OrderRepository(engine)
    repo.create(_order("o1", customer_id="c1"))
    repo.create(_order("o2"))
    assert sorted(o.id for o in repo.find()) == ["o1", "o2"]
    assert repo.find_one("o1").customer_id == "c1"
    assert repo.find_one("o2").customer_id is None


def test_order_find_empty(engine):
    assert OrderRepository(engine).find() == []


def test_order_find_one_missing_raises(engine):
    with pytest.raises(RecordNotFoundError):
        OrderRepository(engine).find_one("missing")


def test_order_update_changes_status(engine):
    repo = OrderRepository(engine)
    repo.create(_order("o1"))
    updated = _order("o1", status="RECEIVED")
    updated.total_amount = 21.0
    repo.update(updated)
    loaded = repo.find_one("o1")
    assert loaded.status == "RECEIVED"
    assert loaded.total_amount == 21.0
    assert len(repo.find()) == 1


def test_order_update_inserts_new(engine):
    repo = OrderRepository(engine)
    repo.update(_order("o9", status="READY"))
    assert repo.find_one("o9").status == "READY"


def test_order_product_find_by_order_id(engine):
    repo = OrderProductRepository(engine)
    for op_id, order_id in [("op1", "o1"), ("op2", "o1"), ("op3", "o2")]:
        repo.create(
            OrderProduct(
                id=op_id,
                order_id=order_id,
                product_id="p1",
                quantity=2,
                amount=1.5,
                total_amount=3.0,
                created_at=T0,
            )
        )
    found = repo.find_by_order_id("o1")
    assert sorted(op.id for op in found) == ["op1", "op2"]
    assert all(op.order_id == "o1" for op in found)
    assert repo.find_by_order_id("none") == []


def test_payment_find_by_order_id_returns_latest(engine):
    repo = PaymentRepository(engine)
    repo.create(Payment(id="pay-old", order_id="o1", status="PENDING", created_at=T0, updated_at=T0))
    repo.create(Payment(id="pay-new", order_id="o1", status="PENDING", created_at=T1, updated_at=T1))
    assert repo.find_by_order_id("o1").id == "pay-new"


def test_payment_find_by_order_id_missing_is_none(engine):
    assert PaymentRepository(engine).find_by_order_id("o1") is None


def test_payment_find_one_and_update(engine):
    repo = PaymentRepository(engine)
    repo.create(Payment(id="pay-1", order_id="o1", status="PENDING", created_at=T0, updated_at=T0))
    repo.update(
        Payment(id="pay-1", order_id="o1", status="AUTHORIZED", created_at=T0, updated_at=T1)
    )
    loaded = repo.find_one("pay-1")
    assert loaded.status == "AUTHORIZED"
    assert loaded.updated_at == T1


def test_payment_find_one_missing_raises(engine):
    with pytest.raises(RecordNotFoundError):
        PaymentRepository(engine).find_one("missing")


def test_product_find_by_category(engine):
    repo = ProductRepository(engine)
    repo.create(_product("p1", 1))
    repo.create(_product("p2", 1))
    repo.create(_product("p3", 2))
    assert sorted(p.id for p in repo.find_by_category(1)) == ["p1", "p2"]
    assert [p.id for p in repo.find_by_category(2)] == ["p3"]
    assert repo.find_by_category(4) == []


def test_product_find_one(engine):
    repo = ProductRepository(engine)
    repo.create(_product("p1", 1))
    found = repo.find_one("p1")
    assert (found.name, found.description, found.amount) == ("Test Product", "Desc", 10.5)


def test_product_delete_by_id(engine):
    repo = ProductRepository(engine)
    repo.create(_product("p1", 1))
    deleted = repo.delete_by_id("p1")
    assert deleted.id == "p1"
    with pytest.raises(RecordNotFoundError):
        repo.find_one("p1")


def test_product_delete_missing_raises(engine):
    with pytest.raises(RecordNotFoundError):
        ProductRepository(engine).delete_by_id("missing")


def test_product_update_by_id(engine):
    repo = ProductRepository(engine)
    repo.create(_product("p1", 1))
    repo.update_by_id(_product("p1", 3, amount=7.25))
    loaded = repo.find_one("p1")
    assert loaded.category_id == 3
    assert loaded.amount == 7.25