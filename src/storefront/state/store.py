"""StateStore: sole owner of the storefront's mutable state.

Holds the catalog, the cart, the order draft, the previewed product and the
current validation errors. Every mutation goes through a method of this
class, and every mutating method (except the order-draft setters and
resets, which callers follow with an explicit validation or re-render)
publishes exactly one topic describing the change.

The order's ``items`` and ``total`` are not stored: ``order`` builds them
from the cart on every access, so they can never drift from it.
"""

from collections.abc import Iterable

import structlog
from protean.exceptions import ValidationError

from storefront.catalogue.product import Product
from storefront.checkout.order import ORDER_FIELDS, OrderDraft, OrderForm, PaymentMethod
from storefront.checkout.steps import ValidationResult, WizardStep
from storefront.checkout.validation import STEP_VALIDATORS
from storefront.events import topics
from storefront.events.bus import EventBus

logger = structlog.get_logger(__name__)


class StateStore:
    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._catalog: list[Product] = []
        self._cart: list[Product] = []
        self._draft = OrderDraft()
        self._preview: str | None = None
        self._errors: dict[str, str] = {}

    # -------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------
    @property
    def catalog(self) -> tuple[Product, ...]:
        return tuple(self._catalog)

    @property
    def cart(self) -> tuple[Product, ...]:
        return tuple(self._cart)

    @property
    def preview(self) -> str | None:
        return self._preview

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def draft(self) -> OrderDraft:
        return self._draft.model_copy()

    @property
    def order(self) -> OrderForm:
        """The order as it would be submitted right now."""
        return OrderForm(
            **self._draft.model_dump(),
            items=self.cart_ids(),
            total=self.cart_total(),
        )

    def get_product(self, product_id: str) -> Product | None:
        return next((product for product in self._catalog if product.id == product_id), None)

    def cart_ids(self) -> list[str]:
        return [product.id for product in self._cart]

    def cart_total(self) -> float:
        # A priceless line never gets in, but count a stray one as zero
        return sum(product.price or 0 for product in self._cart)

    def in_cart(self, product_id: str) -> bool:
        return any(product.id == product_id for product in self._cart)

    # -------------------------------------------------------------------
    # Catalog and preview
    # -------------------------------------------------------------------
    def set_catalog(self, products: Iterable[Product]) -> None:
        """Replace the catalog."""
        self._catalog = list(products)
        logger.info("Catalog replaced", product_count=len(self._catalog))
        self._bus.publish(topics.ITEMS_CHANGED, {"items": self.catalog})

    def set_preview(self, product_id: str | None) -> None:
        self._preview = product_id
        self._bus.publish(topics.PREVIEW_CHANGED, {"id": product_id})

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add_to_cart(self, product: Product) -> bool:
        """Append ``product`` unless it is already in the cart or priceless."""
        if product.is_priceless:
            logger.warning("Refusing to add priceless product to cart", product_id=product.id)
            return False

        if self.in_cart(product.id):
            logger.debug("Product already in cart", product_id=product.id)
            return False

        self._cart.append(product)
        self._cart_changed()
        return True

    def remove_from_cart(self, product_id: str) -> bool:
        """Remove the line for ``product_id``. Absent ids change nothing."""
        if not self.in_cart(product_id):
            return False

        self._cart = [product for product in self._cart if product.id != product_id]
        self._cart_changed()
        return True

    def clear_cart(self) -> None:
        self._cart = []
        self._cart_changed()

    def _cart_changed(self) -> None:
        self._bus.publish(topics.CART_CHANGED, {"items": self.cart})

    # -------------------------------------------------------------------
    # Order draft
    # -------------------------------------------------------------------
    def set_order_field(self, field: str, value: str) -> None:
        """Set one user-editable order field. Does not validate or publish."""
        if field not in ORDER_FIELDS:
            logger.warning("Ignoring unknown order field", field=field)
            return

        setattr(self._draft, field, value)

    def set_payment_method(self, method: PaymentMethod | str) -> None:
        self.set_order_field("payment", method.value if isinstance(method, PaymentMethod) else method)

    def validate(self, step: WizardStep | str) -> bool:
        """Validate the fields of ``step`` and replace the error map.

        Errors of the other step are discarded, not merged. Publishes the
        new error map, then a step-tagged ``ValidationResult``.
        """
        step = self._resolve_step(step)

        self._errors = STEP_VALIDATORS[step](self._draft)
        is_valid = not self._errors

        self._bus.publish(topics.FORM_ERRORS_CHANGED, self.errors)
        self._bus.publish(
            topics.ORDER_VALIDITY_CHANGED,
            ValidationResult(step=step, is_valid=is_valid, errors=self.errors),
        )
        return is_valid

    def reset_order(self) -> None:
        """Restore the draft defaults and clear errors. Publishes nothing."""
        self._draft = OrderDraft()
        self._errors = {}

    def clear_all(self) -> None:
        """Empty the cart, reset the order and drop the preview.

        Publishes nothing; the caller re-renders.
        """
        self._cart = []
        self.reset_order()
        self._preview = None

    @staticmethod
    def _resolve_step(step: WizardStep | str) -> WizardStep:
        try:
            resolved = WizardStep(step)
        except ValueError:
            raise ValidationError({"step": [f"Unknown wizard step: {step!r}"]}) from None

        if resolved not in STEP_VALIDATORS:
            raise ValidationError({"step": [f"Nothing to validate for step {resolved.value!r}"]})
        return resolved
