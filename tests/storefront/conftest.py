import json

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    from storefront.notification import reset_channels
    from storefront.notification.confirmation import shutdown_confirmations

    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_channels()
    shutdown_confirmations()


# ---------------------------------------------------------------------------
# Inventory mode
# ---------------------------------------------------------------------------
@pytest.fixture()
def sized_mode(monkeypatch):
    monkeypatch.setenv("STOREFRONT_INVENTORY_MODE", "sized")


@pytest.fixture()
def colored_mode(monkeypatch):
    monkeypatch.setenv("STOREFRONT_INVENTORY_MODE", "colored")


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def email_channel():
    from storefront.notification import get_email_channel

    return get_email_channel()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def red_and_blue(red_m=5, blue_s=3):
    return [
        {"name": "red", "hex_code": "#FF0000", "inventory": [{"size": "M", "quantity": red_m}]},
        {"name": "blue", "hex_code": "#0000FF", "inventory": [{"size": "S", "quantity": blue_s}]},
    ]


@pytest.fixture()
def create_product():
    """Create a product through the command pipeline and return its id."""
    from storefront.catalogue.creation import CreateProduct

    def _create(title="Rainbow Hoodie", price=1000.0, discount=0.0, stock=None, gender="unisex"):
        command = CreateProduct(
            title=title,
            price=price,
            discount=discount,
            gender=gender,
            stock=json.dumps(red_and_blue() if stock is None else stock),
        )
        return current_domain.process(command, asynchronous=False)

    return _create


@pytest.fixture()
def register_customer():
    from storefront.customer.registration import RegisterCustomer

    def _register(name="Ada Shopper", email="ada@example.com"):
        return current_domain.process(RegisterCustomer(name=name, email=email), asynchronous=False)

    return _register
