"""WizardPresenter: orchestrates catalog, cart and the checkout wizard.

The presenter listens to every user-intent and state-change topic on the
bus. User intents mutate the StateStore (directly or through the
CartCoordinator); the store's change notifications come back to the
presenter, which re-renders the affected views. Rendering never happens
anywhere else, so every change follows the same loop:

    input -> mutation -> notification -> render

Screen flow:
    1. browsing -> card:select -> preview_open
    2. basket:open -> cart_open
    3. wizard:open (cart not empty) -> address_step
    4. order:submit (address valid) -> contacts_step
    5. contacts:submit (contacts valid, order accepted) -> success_shown
    6. success:close / modal:close -> browsing

The active wizard step decides where validation results go. Results carry
the step they were computed for; a result whose step (or error fields) does
not match the active step is dropped instead of being painted on the wrong
form.
"""

import structlog
from pydantic import BaseModel, ConfigDict

from storefront.api.client import ApiError, CatalogApi
from storefront.cart.coordinator import CartCoordinator
from storefront.catalogue.product import Product
from storefront.checkout.steps import ScreenState, ValidationResult, WizardStep
from storefront.checkout.validation import STEP_FIELDS
from storefront.events import topics
from storefront.events.bus import EventBus
from storefront.state.store import StateStore
from storefront.views.contracts import Panel, StorefrontViews
from storefront.views.data import AddressFormData, CardData, CartViewData, ContactsFormData, SuccessData

logger = structlog.get_logger(__name__)

PRICELESS_LABEL = "Priceless"
ADD_LABEL = "Add to cart"
REMOVE_LABEL = "Remove from cart"
CART_LINE_REMOVE_LABEL = "Remove"
CHECKOUT_LABEL = "Checkout"
EMPTY_CART_LABEL = "Cart is empty"

EMPTY_ORDER_ALERT = "Cannot place an empty order."
SUBMIT_FAILED_ALERT = "Could not place the order. Please try again."


# ---------------------------------------------------------------------------
# Intent payloads published by the views
# ---------------------------------------------------------------------------
class ProductRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str


class FieldChange(BaseModel):
    field: str
    value: str


class PaymentChange(BaseModel):
    method: str


def format_price(price: float | None, currency_label: str) -> str:
    if price is None:
        return PRICELESS_LABEL
    amount = str(int(price)) if float(price).is_integer() else f"{price:.2f}"
    return f"{amount} {currency_label}"


class WizardPresenter:
    def __init__(
        self,
        bus: EventBus,
        store: StateStore,
        cart: CartCoordinator,
        api: CatalogApi,
        views: StorefrontViews,
        currency_label: str = "synapses",
    ) -> None:
        views.verify()

        self._bus = bus
        self._store = store
        self._cart = cart
        self._api = api
        self._views = views
        self.currency_label = currency_label

        self.state = ScreenState.BROWSING
        self.active_step = WizardStep.NONE
        self._submitting = False

        self._subscriptions = [
            (topics.ITEMS_CHANGED, self._on_items_changed),
            (topics.PREVIEW_CHANGED, self._on_preview_changed),
            (topics.CART_CHANGED, self._on_cart_changed),
            (topics.CARD_SELECT, self._on_card_select),
            (topics.BASKET_OPEN, self._on_basket_open),
            (topics.PRODUCT_ADD, self._on_product_add),
            (topics.PRODUCT_REMOVE, self._on_product_remove),
            (topics.WIZARD_OPEN, self._on_wizard_open),
            (topics.ORDER_OPEN, self._on_wizard_open),
            (topics.FORM_FIELD_CHANGED, self._on_field_changed),
            (topics.CONTACTS_FIELD_CHANGED, self._on_field_changed),
            (topics.PAYMENT_CHANGED, self._on_payment_changed),
            (topics.ORDER_SUBMIT, self._on_address_submit),
            (topics.CONTACTS_SUBMIT, self._on_contacts_submit),
            (topics.ORDER_VALIDITY_CHANGED, self._on_validity_changed),
            (topics.MODAL_OPEN, self._on_modal_open),
            (topics.MODAL_CLOSE, self._on_modal_close),
            (topics.SUCCESS_CLOSE, self._on_success_close),
        ]
        for topic, handler in self._subscriptions:
            self._bus.subscribe(topic, handler)

    @property
    def submitting(self) -> bool:
        """Whether an order submission is in flight."""
        return self._submitting

    def load_catalog(self) -> bool:
        """Fetch the catalog and hand it to the store.

        A failed fetch is logged and leaves the catalog empty.
        """
        try:
            products = self._api.fetch_catalog()
        except ApiError as exc:
            logger.error("Failed to load catalog", error=str(exc), status=exc.status)
            return False

        self._store.set_catalog(products)
        return True

    def dispose(self) -> None:
        """Detach the presenter from the bus."""
        for topic, handler in self._subscriptions:
            self._bus.unsubscribe(topic, handler)

    # -------------------------------------------------------------------
    # Catalog, preview and cart
    # -------------------------------------------------------------------
    def _on_items_changed(self, payload) -> None:
        self._render_catalog()

    def _on_card_select(self, payload) -> None:
        product = self._lookup(payload, topics.CARD_SELECT)
        if product is None:
            return

        self._store.set_preview(product.id)
        self._show(Panel.PREVIEW)
        self.state = ScreenState.PREVIEW_OPEN

    def _on_preview_changed(self, payload) -> None:
        product_id = (payload or {}).get("id")
        if product_id is None:
            return

        product = self._store.get_product(product_id)
        if product is not None:
            self._views.preview.render(self._preview_card(product))

    def _on_basket_open(self, payload) -> None:
        self._render_cart()
        self._show(Panel.CART)
        self.state = ScreenState.CART_OPEN

    def _on_product_add(self, payload) -> None:
        product = self._lookup(payload, topics.PRODUCT_ADD)
        if product is None:
            return

        if self._cart.add_product(product):
            self._refresh_preview(product.id)

    def _on_product_remove(self, payload) -> None:
        product = self._lookup(payload, topics.PRODUCT_REMOVE)
        if product is None:
            return

        if self._cart.remove_product(product.id):
            self._refresh_preview(product.id)

    def _on_cart_changed(self, payload) -> None:
        # Full redraw: catalog labels follow cart membership
        self._views.page.set_counter(self._cart.item_count())
        self._render_cart()
        self._render_catalog()

    # -------------------------------------------------------------------
    # Checkout wizard
    # -------------------------------------------------------------------
    def _on_wizard_open(self, payload) -> None:
        if self._cart.item_count() == 0:
            logger.warning("Checkout requested with an empty cart")
            self._views.notifier.alert(EMPTY_ORDER_ALERT)
            self._close_overlay()
            return

        self._store.reset_order()
        self.active_step = WizardStep.ADDRESS
        self.state = ScreenState.ADDRESS_STEP
        logger.info("Checkout started", items=self._cart.item_count(), total=self._cart.total())

        self._store.validate(WizardStep.ADDRESS)
        self._show(Panel.ADDRESS)

    def _on_field_changed(self, payload) -> None:
        change = FieldChange.model_validate(payload)
        self._store.set_order_field(change.field, change.value)
        self._validate_active_step()

    def _on_payment_changed(self, payload) -> None:
        change = PaymentChange.model_validate(payload)
        self._store.set_payment_method(change.method)
        self._validate_active_step()

    def _on_address_submit(self, payload) -> None:
        if self.active_step is not WizardStep.ADDRESS:
            logger.warning("Address submitted outside the address step", active_step=self.active_step.value)
            return

        if not self._store.validate(WizardStep.ADDRESS):
            logger.info("Address step is invalid, staying put")
            return

        self.active_step = WizardStep.CONTACTS
        self.state = ScreenState.CONTACTS_STEP
        self._store.validate(WizardStep.CONTACTS)
        self._show(Panel.CONTACTS)

    def _on_contacts_submit(self, payload) -> None:
        if self.active_step is not WizardStep.CONTACTS:
            logger.warning("Contacts submitted outside the contacts step", active_step=self.active_step.value)
            return

        if self._submitting:
            logger.warning("Order submission already in progress, ignoring repeat submit")
            return

        if not self._store.validate(WizardStep.CONTACTS):
            logger.info("Contacts step is invalid, staying put")
            return

        if self._cart.item_count() == 0:
            self._views.notifier.alert(EMPTY_ORDER_ALERT)
            return

        order = self._store.order
        self._submitting = True
        try:
            result = self._api.submit_order(order)
        except ApiError as exc:
            logger.error("Order submission failed", error=str(exc), status=exc.status, code=exc.code)
            self._views.notifier.alert(SUBMIT_FAILED_ALERT)
            return
        finally:
            self._submitting = False

        logger.info("Order placed", order_id=result.id, total=result.total)
        self.active_step = WizardStep.NONE
        self._cart.clear()
        self._store.reset_order()
        self.state = ScreenState.SUCCESS_SHOWN
        self._views.success.render(
            SuccessData(
                order_id=result.id,
                total=result.total,
                message=f"Charged {format_price(result.total, self.currency_label)}",
            )
        )
        self._show(Panel.SUCCESS)

    def _on_validity_changed(self, result) -> None:
        result = ValidationResult.model_validate(result)

        if self.active_step is WizardStep.NONE:
            logger.debug("Dropping validation result outside the wizard", result_step=result.step.value)
            return

        if result.step is not self.active_step:
            logger.debug(
                "Dropping validation result for inactive step",
                result_step=result.step.value,
                active_step=self.active_step.value,
            )
            return

        if not set(result.errors) <= STEP_FIELDS[result.step]:
            logger.warning(
                "Dropping validation result with foreign fields",
                step=result.step.value,
                fields=sorted(result.errors),
            )
            return

        draft = self._store.draft
        if result.step is WizardStep.ADDRESS:
            self._views.address_form.render(
                AddressFormData(
                    address=draft.address,
                    payment=draft.payment,
                    valid=result.is_valid,
                    errors=result.errors,
                )
            )
        else:
            self._views.contacts_form.render(
                ContactsFormData(
                    email=draft.email,
                    phone=draft.phone,
                    valid=result.is_valid,
                    errors=result.errors,
                )
            )

    def _validate_active_step(self) -> None:
        if self.active_step is WizardStep.NONE:
            logger.warning("Order field changed with no active wizard step")
            return
        self._store.validate(self.active_step)

    # -------------------------------------------------------------------
    # Overlay
    # -------------------------------------------------------------------
    def _on_modal_open(self, payload) -> None:
        self._views.page.set_locked(True)

    def _on_modal_close(self, payload) -> None:
        self._views.modal.hide()
        self._views.page.set_locked(False)
        self._store.set_preview(None)
        self._store.reset_order()
        self.active_step = WizardStep.NONE
        self.state = ScreenState.BROWSING

    def _on_success_close(self, payload) -> None:
        self._close_overlay()

    def _show(self, panel: Panel) -> None:
        self._views.modal.show(panel)
        self._bus.publish(topics.MODAL_OPEN, {"panel": panel.value})

    def _close_overlay(self) -> None:
        self._bus.publish(topics.MODAL_CLOSE)

    # -------------------------------------------------------------------
    # Rendering helpers
    # -------------------------------------------------------------------
    def _lookup(self, payload, topic: str) -> Product | None:
        ref = ProductRef.model_validate(payload)
        product = self._store.get_product(ref.id)
        if product is None:
            logger.warning("Unknown product", topic=topic, product_id=ref.id)
        return product

    def _refresh_preview(self, product_id: str) -> None:
        if self.state is ScreenState.PREVIEW_OPEN and self._store.preview == product_id:
            self._views.preview.render(self._preview_card(self._store.get_product(product_id)))

    def _render_catalog(self) -> None:
        self._views.page.render_catalog([self._catalog_card(product) for product in self._store.catalog])

    def _render_cart(self) -> None:
        lines = [self._cart_line(product, index) for index, product in enumerate(self._cart.items(), start=1)]
        total = self._cart.total()
        self._views.cart.render(
            CartViewData(
                items=lines,
                total=total,
                total_label=format_price(total, self.currency_label),
                button_text=CHECKOUT_LABEL if lines else EMPTY_CART_LABEL,
                button_disabled=not lines,
            )
        )

    def _catalog_card(self, product: Product, description: str | None = None) -> CardData:
        if product.is_priceless:
            button_text = PRICELESS_LABEL
        elif self._cart.is_in_cart(product.id):
            button_text = REMOVE_LABEL
        else:
            button_text = ADD_LABEL

        return CardData(
            id=product.id,
            title=product.title,
            category=product.category,
            image_url=product.image_url,
            price=product.price,
            price_label=format_price(product.price, self.currency_label),
            description=description,
            button_text=button_text,
            button_disabled=product.is_priceless,
        )

    def _preview_card(self, product: Product) -> CardData:
        return self._catalog_card(product, description=product.description)

    def _cart_line(self, product: Product, index: int) -> CardData:
        return CardData(
            id=product.id,
            title=product.title,
            category=product.category,
            image_url=product.image_url,
            price=product.price,
            price_label=format_price(product.price, self.currency_label),
            index=index,
            button_text=CART_LINE_REMOVE_LABEL,
            button_disabled=False,
        )
