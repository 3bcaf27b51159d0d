import pytest
from protean.integrations.pytest import DomainFixture

from storefront.store import Store


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def store():
    """A Store loaded with the demo lamp catalog."""
    store = Store()
    store.seed_catalog()
    return store


@pytest.fixture()
def empty_store():
    return Store()


@pytest.fixture()
def customer_data():
    return {
        "name": "Ana Torres",
        "email": "ana@example.com",
        "phone": "+593 99 123 4567",
        "address": "Av. Amazonas 123",
        "city": "Quito",
    }
