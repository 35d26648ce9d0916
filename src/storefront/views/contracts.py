"""View collaborator contracts consumed by the WizardPresenter."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Protocol

from protean.exceptions import ConfigurationError

from storefront.views.data import AddressFormData, CardData, CartViewData, ContactsFormData, SuccessData


class Panel(Enum):
    """Content the modal overlay can show."""

    PREVIEW = "preview"
    CART = "cart"
    ADDRESS = "address"
    CONTACTS = "contacts"
    SUCCESS = "success"


class PageView(Protocol):
    def render_catalog(self, cards: list[CardData]) -> None: ...

    def set_counter(self, count: int) -> None: ...

    def set_locked(self, locked: bool) -> None: ...


class ModalView(Protocol):
    def show(self, panel: Panel) -> None: ...

    def hide(self) -> None: ...


class PreviewView(Protocol):
    def render(self, data: CardData) -> None: ...


class CartView(Protocol):
    def render(self, data: CartViewData) -> None: ...


class AddressFormView(Protocol):
    def render(self, data: AddressFormData) -> None: ...


class ContactsFormView(Protocol):
    def render(self, data: ContactsFormData) -> None: ...


class SuccessView(Protocol):
    def render(self, data: SuccessData) -> None: ...


class Notifier(Protocol):
    def alert(self, message: str) -> None: ...


# Methods each slot must provide
_REQUIRED_METHODS = {
    "page": ("render_catalog", "set_counter", "set_locked"),
    "modal": ("show", "hide"),
    "preview": ("render",),
    "cart": ("render",),
    "address_form": ("render",),
    "contacts_form": ("render",),
    "success": ("render",),
    "notifier": ("alert",),
}


@dataclass(frozen=True)
class StorefrontViews:
    page: PageView
    modal: ModalView
    preview: PreviewView
    cart: CartView
    address_form: AddressFormView
    contacts_form: ContactsFormView
    success: SuccessView
    notifier: Notifier

    def verify(self) -> None:
        """Refuse a view set that cannot receive every render call."""
        missing = []
        for slot in fields(self):
            view = getattr(self, slot.name)
            for method in _REQUIRED_METHODS[slot.name]:
                if not callable(getattr(view, method, None)):
                    missing.append(f"{slot.name}.{method}")

        if missing:
            raise ConfigurationError(f"Storefront views are incomplete: missing {', '.join(missing)}")
