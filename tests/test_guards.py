import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petflow.schemas.product import ProductCreate
from petflow.services.analytics_service import dashboard_metrics, empty_metrics
from petflow.services.appointment_service import list_in_range
from petflow.services.client_service import inactive_clients
from petflow.services.product_service import create_product, list_products


@pytest.fixture
def broken_db():
    # No tables created: every query fails with OperationalError.
    engine = create_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()


def test_reads_degrade_to_empty_results(broken_db):
    assert list_products(broken_db) == []
    assert list_in_range(broken_db) == []
    assert inactive_clients(broken_db, 30) == []
    assert dashboard_metrics(broken_db) == empty_metrics()


def test_writes_fail_loudly(broken_db):
    with pytest.raises(OperationalError):
        create_product(broken_db, ProductCreate(name="Ball", sku="BALL"))
