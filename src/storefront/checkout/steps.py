"""Wizard steps and the step-tagged validation result."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class WizardStep(Enum):
    NONE = "none"
    ADDRESS = "address"
    CONTACTS = "contacts"


class ScreenState(Enum):
    """What the storefront is currently showing."""

    BROWSING = "browsing"
    PREVIEW_OPEN = "preview_open"
    CART_OPEN = "cart_open"
    ADDRESS_STEP = "address_step"
    CONTACTS_STEP = "contacts_step"
    SUCCESS_SHOWN = "success_shown"


class ValidationResult(BaseModel):
    """Payload of the order-form validity topic.

    Carries the step it was computed for, so a consumer can tell a result
    for the step on screen from a stale one.
    """

    model_config = ConfigDict(frozen=True)

    step: WizardStep
    is_valid: bool
    errors: dict[str, str]
