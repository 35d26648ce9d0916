"""Plain render payloads handed to the view collaborators.

Views are write-only sinks: they receive one of these models and return
nothing. Every payload is complete, so a view can redraw from it alone.
"""

from pydantic import BaseModel, ConfigDict


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True)


class CardData(_Payload):
    """A product card: catalog tile, preview, or cart line."""

    id: str
    title: str
    category: str
    image_url: str
    price: float | None
    price_label: str
    description: str | None = None
    index: int | None = None  # 1-based position, cart lines only
    button_text: str
    button_disabled: bool


class CartViewData(_Payload):
    items: list[CardData]
    total: float
    total_label: str
    button_text: str
    button_disabled: bool


class AddressFormData(_Payload):
    address: str
    payment: str
    valid: bool
    errors: dict[str, str]


class ContactsFormData(_Payload):
    email: str
    phone: str
    valid: bool
    errors: dict[str, str]


class SuccessData(_Payload):
    order_id: str
    total: float
    message: str
