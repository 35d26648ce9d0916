from pathlib import Path

import pytest
from storefront.cart.coordinator import CartCoordinator
from storefront.catalogue.product import Product
from storefront.checkout.order import OrderResult
from storefront.checkout.wizard import WizardPresenter
from storefront.events.bus import EventBus
from storefront.state.store import StateStore
from storefront.views.contracts import StorefrontViews


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path) or "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# In-memory collaborators
# ---------------------------------------------------------------------------
class FakeApi:
    """Product/order API double recording every submitted order."""

    def __init__(self, products, result_id="ord-001"):
        self.products = list(products)
        self.result_id = result_id
        self.catalog_error = None
        self.submit_error = None
        self.on_submit = None
        self.orders = []

    def fetch_catalog(self):
        if self.catalog_error is not None:
            raise self.catalog_error
        return list(self.products)

    def submit_order(self, order):
        self.orders.append(order)
        if self.on_submit is not None:
            self.on_submit(order)
        if self.submit_error is not None:
            raise self.submit_error
        return OrderResult(id=self.result_id, total=order.total)


class RecordingView:
    def __init__(self):
        self.calls = []

    def render(self, data):
        self.calls.append(data)

    @property
    def last(self):
        return self.calls[-1] if self.calls else None


class RecordingPage:
    def __init__(self):
        self.catalogs = []
        self.counter = 0
        self.locked = False

    def render_catalog(self, cards):
        self.catalogs.append(cards)

    def set_counter(self, count):
        self.counter = count

    def set_locked(self, locked):
        self.locked = locked

    @property
    def cards(self):
        return {card.id: card for card in self.catalogs[-1]} if self.catalogs else {}


class RecordingModal:
    def __init__(self):
        self.panel = None
        self.shown = []

    def show(self, panel):
        self.panel = panel
        self.shown.append(panel)

    def hide(self):
        self.panel = None


class RecordingNotifier:
    def __init__(self):
        self.alerts = []

    def alert(self, message):
        self.alerts.append(message)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    return [
        Product(
            id="prod-001",
            title="+1 hour in a day",
            description="Unlock an extra hour every day",
            price=750.0,
            category="soft-skill",
            image_url="https://cdn.test/shell.svg",
        ),
        Product(
            id="prod-002",
            title="HEX lollipop",
            description="Tastes like hexadecimal",
            price=1450.0,
            category="other",
            image_url="https://cdn.test/lollipop.svg",
        ),
        Product(
            id="prod-003",
            title="Mythical pseudocode",
            description="Beyond any budget",
            price=None,
            category="other",
            image_url="https://cdn.test/pseudocode.svg",
        ),
        Product(
            id="prod-004",
            title="Cat button",
            price=100.0,
            category="button",
            image_url="https://cdn.test/cat.svg",
        ),
    ]


@pytest.fixture()
def bus():
    # Tests see handler failures directly
    return EventBus(isolate_errors=False)


@pytest.fixture()
def published(bus):
    """Every (topic, payload) published on ``bus``, in order."""
    records = []

    original = bus.publish

    def recording_publish(topic, payload=None):
        records.append((topic, payload))
        original(topic, payload)

    bus.publish = recording_publish
    return records


@pytest.fixture()
def store(bus):
    return StateStore(bus)


@pytest.fixture()
def cart(store, bus):
    return CartCoordinator(store, bus)


@pytest.fixture()
def api(products):
    return FakeApi(products)


@pytest.fixture()
def views():
    return StorefrontViews(
        page=RecordingPage(),
        modal=RecordingModal(),
        preview=RecordingView(),
        cart=RecordingView(),
        address_form=RecordingView(),
        contacts_form=RecordingView(),
        success=RecordingView(),
        notifier=RecordingNotifier(),
    )


@pytest.fixture()
def presenter(bus, store, cart, api, views):
    presenter = WizardPresenter(bus, store, cart, api, views)
    presenter.load_catalog()
    return presenter
