"""Order models: the editable draft, the submitted form and the API result."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PaymentMethod(Enum):
    CARD = "card"
    CASH = "cash"


# Fields the user edits through the wizard; items/total are derived from the cart
ORDER_FIELDS = ("payment", "address", "email", "phone")


class OrderDraft(BaseModel):
    """User-entered order fields, mutated field by field during the wizard."""

    payment: str = PaymentMethod.CARD.value
    address: str = ""
    email: str = ""
    phone: str = ""


class OrderForm(BaseModel):
    """Snapshot of the order as submitted: draft fields plus the cart contents."""

    model_config = ConfigDict(frozen=True)

    payment: str
    address: str
    email: str
    phone: str
    items: list[str]
    total: float


class OrderResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    total: float
