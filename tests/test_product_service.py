"""Tests for ProductService against the database directly."""
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import ProductNotFoundError, StorageError
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.product_service import ProductService


def test_create_assigns_id_and_default_availability(db_session):
    service = ProductService(db_session)

    product = service.create(ProductCreate(name="Monitor", price=300))

    assert product.id > 0
    assert product.availability is True
    assert db_session.query(Product).count() == 1


def test_get_all_orders_by_id_desc(db_session):
    service = ProductService(db_session)
    for name in ("A", "B", "C"):
        service.create(ProductCreate(name=name, price=1))

    names = [p.name for p in service.get_all()]

    assert names == ["C", "B", "A"]


def test_get_by_id_missing_raises(db_session):
    service = ProductService(db_session)

    with pytest.raises(ProductNotFoundError) as exc_info:
        service.get_by_id(42)

    assert exc_info.value.product_id == 42
    assert exc_info.value.status_code == 404


def test_update_overwrites_all_fields(db_session):
    service = ProductService(db_session)
    product = service.create(ProductCreate(name="Monitor", price=300))

    updated = service.update(
        product.id, ProductUpdate(name="Monitor 4K", price=450, availability=False)
    )

    assert (updated.name, updated.price, updated.availability) == ("Monitor 4K", 450, False)


def test_toggle_availability_round_trip(db_session):
    service = ProductService(db_session)
    product = service.create(ProductCreate(name="Monitor", price=300))

    assert service.toggle_availability(product.id).availability is False
    assert service.toggle_availability(product.id).availability is True


def test_toggle_availability_missing_raises(db_session):
    service = ProductService(db_session)

    with pytest.raises(ProductNotFoundError):
        service.toggle_availability(9999)

    assert db_session.query(Product).count() == 0


def test_delete_removes_row(db_session):
    service = ProductService(db_session)
    product = service.create(ProductCreate(name="Monitor", price=300))

    service.delete(product.id)

    with pytest.raises(ProductNotFoundError):
        service.get_by_id(product.id)


def test_database_rejects_non_positive_price(db_session):
    """Test the table constraint holds even when schemas are bypassed."""
    db_session.add(Product(name="Monitor", price=0))

    with pytest.raises(IntegrityError):
        db_session.commit()

    db_session.rollback()


def test_storage_failure_rolls_back_and_raises(db_session):
    service = ProductService(db_session)
    error = OperationalError("SELECT", {}, Exception("connection lost"))

    with patch.object(db_session, "query", side_effect=error), \
            patch.object(db_session, "rollback") as rollback:
        with pytest.raises(StorageError) as exc_info:
            service.get_all()

    rollback.assert_called_once()
    assert exc_info.value.operation == "list"
    assert exc_info.value.status_code == 500
