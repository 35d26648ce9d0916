"""Storefront composition root.

Builds one explicitly owned set of bus, store, cart coordinator and
presenter. Nothing is global: every collaborator is handed its
dependencies here.

Usage:
    storefront = build_storefront(api, views, settings)
    storefront.start()                       # loads the catalog
    storefront.bus.publish("basket:open")    # views publish intents
"""

from dataclasses import dataclass

import structlog

from storefront.api.client import CatalogApi, StorefrontApi
from storefront.cart.coordinator import CartCoordinator
from storefront.checkout.wizard import WizardPresenter
from storefront.config import Settings
from storefront.events.bus import EventBus
from storefront.state.store import StateStore
from storefront.views.contracts import StorefrontViews

logger = structlog.get_logger(__name__)


@dataclass
class Storefront:
    bus: EventBus
    store: StateStore
    cart: CartCoordinator
    presenter: WizardPresenter

    def start(self) -> bool:
        """Load the catalog. Returns ``False`` when the fetch failed."""
        return self.presenter.load_catalog()

    def stop(self) -> None:
        self.presenter.dispose()


def create_api(settings: Settings) -> StorefrontApi:
    return StorefrontApi(settings.api_url, settings.cdn_url, timeout=settings.request_timeout)


def build_storefront(api: CatalogApi, views: StorefrontViews, settings: Settings | None = None) -> Storefront:
    settings = settings or Settings()

    bus = EventBus(isolate_errors=settings.isolate_handler_errors)
    store = StateStore(bus)
    cart = CartCoordinator(store, bus)
    presenter = WizardPresenter(bus, store, cart, api, views, currency_label=settings.currency_label)

    logger.debug("Storefront assembled", environment=settings.environment, api_url=settings.api_url)
    return Storefront(bus=bus, store=store, cart=cart, presenter=presenter)
