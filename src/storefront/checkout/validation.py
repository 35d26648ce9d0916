"""Per-step validation rules for the checkout wizard.

Each rule set only looks at the fields of its own step and returns a sparse
``{field: message}`` mapping; an empty mapping means the step is valid.
"""

import re

from storefront.checkout.order import OrderDraft, PaymentMethod
from storefront.checkout.steps import WizardStep

MIN_ADDRESS_LENGTH = 5

EMAIL_PATTERN = re.compile(r"[\w-]+(\.[\w-]+)*@([\w-]+\.)+[a-zA-Z]{2,7}", re.ASCII)
PHONE_PATTERN = re.compile(r"\+?\d{10,15}", re.ASCII)

_PAYMENT_METHODS = {method.value for method in PaymentMethod}


def validate_address_step(draft: OrderDraft) -> dict[str, str]:
    """Payment method and delivery address."""
    errors = {}

    if not draft.payment:
        errors["payment"] = "Select a payment method"
    elif draft.payment not in _PAYMENT_METHODS:
        errors["payment"] = f"Unknown payment method: {draft.payment}"

    address = draft.address.strip()
    if not address:
        errors["address"] = "Enter a delivery address"
    elif len(address) < MIN_ADDRESS_LENGTH:
        errors["address"] = f"Address must be at least {MIN_ADDRESS_LENGTH} characters"

    return errors


def validate_contacts_step(draft: OrderDraft) -> dict[str, str]:
    """Email and phone number."""
    errors = {}

    if not draft.email.strip():
        errors["email"] = "Enter an email address"
    elif not EMAIL_PATTERN.fullmatch(draft.email):
        errors["email"] = "Invalid email address"

    if not draft.phone.strip():
        errors["phone"] = "Enter a phone number"
    elif not PHONE_PATTERN.fullmatch(draft.phone):
        errors["phone"] = "Invalid phone number"

    return errors


STEP_FIELDS = {
    WizardStep.ADDRESS: frozenset({"payment", "address"}),
    WizardStep.CONTACTS: frozenset({"email", "phone"}),
}

STEP_VALIDATORS = {
    WizardStep.ADDRESS: validate_address_step,
    WizardStep.CONTACTS: validate_contacts_step,
}
