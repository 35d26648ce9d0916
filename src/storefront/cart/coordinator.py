"""CartCoordinator: duplicate-free cart operations on top of the StateStore.

Owns the "is this product already in the cart?" policy used by the views,
and re-announces ``cart:changed`` after every accepted mutation.
"""

import structlog

from storefront.catalogue.product import Product
from storefront.events import topics
from storefront.events.bus import EventBus
from storefront.state.store import StateStore

logger = structlog.get_logger(__name__)


class CartCoordinator:
    def __init__(self, store: StateStore, bus: EventBus) -> None:
        self._store = store
        self._bus = bus

    def add_product(self, product: Product) -> bool:
        """Add ``product`` to the cart. Returns ``False`` if it was rejected."""
        if product.is_priceless:
            logger.warning("Priceless products cannot be bought", product_id=product.id)
            return False

        if self.is_in_cart(product.id):
            logger.warning("Product is already in the cart", product_id=product.id, title=product.title)
            return False

        self._store.add_to_cart(product)
        self._announce()
        return True

    def remove_product(self, product_id: str) -> bool:
        """Remove ``product_id`` from the cart. Returns ``False`` if it was absent."""
        if not self.is_in_cart(product_id):
            logger.warning("Product not in cart, nothing to remove", product_id=product_id)
            return False

        self._store.remove_from_cart(product_id)
        self._announce()
        return True

    def clear(self) -> None:
        self._store.clear_cart()
        self._announce()

    def is_in_cart(self, product_id: str) -> bool:
        return self._store.in_cart(product_id)

    def items(self) -> tuple[Product, ...]:
        return self._store.cart

    def item_count(self) -> int:
        return len(self._store.cart)

    def item_ids(self) -> list[str]:
        return self._store.cart_ids()

    def total(self) -> float:
        return self._store.cart_total()

    def _announce(self) -> None:
        self._bus.publish(topics.CART_CHANGED, {"items": self._store.cart})
