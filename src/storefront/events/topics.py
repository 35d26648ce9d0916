"""Topic names published and consumed on the storefront event bus.

Names are exact and case-sensitive. Views publish the user-intent topics,
the state store publishes the change topics, and the presenter listens to
both.
"""

# State change notifications (published by StateStore / CartCoordinator)
ITEMS_CHANGED = "items:changed"
PREVIEW_CHANGED = "preview:changed"
CART_CHANGED = "cart:changed"
FORM_ERRORS_CHANGED = "formErrors:changed"
ORDER_VALIDITY_CHANGED = "orderForm:validity:changed"

# Catalog and cart intents
CARD_SELECT = "card:select"
BASKET_OPEN = "basket:open"
PRODUCT_ADD = "product:add"
PRODUCT_REMOVE = "product:remove"

# Checkout wizard intents
WIZARD_OPEN = "wizard:open"
ORDER_OPEN = "order:open"  # Alias of WIZARD_OPEN published by the cart view
FORM_FIELD_CHANGED = "form:field:changed"
PAYMENT_CHANGED = "payment:changed"
ORDER_SUBMIT = "order:submit"
CONTACTS_FIELD_CHANGED = "contacts:field:changed"
CONTACTS_SUBMIT = "contacts:submit"

# Overlay lifecycle
MODAL_OPEN = "modal:open"
MODAL_CLOSE = "modal:close"
SUCCESS_CLOSE = "success:close"
