"""Validation results reach the form of the active step and nowhere else."""

import pytest
from protean.exceptions import ValidationError
from storefront.checkout.steps import ValidationResult, WizardStep
from storefront.events import topics


@pytest.fixture()
def at_address_step(presenter, bus):
    bus.publish(topics.PRODUCT_ADD, {"id": "prod-001"})
    bus.publish(topics.WIZARD_OPEN)
    return presenter


@pytest.fixture()
def at_contacts_step(at_address_step, bus):
    bus.publish(topics.FORM_FIELD_CHANGED, {"field": "address", "value": "221B Baker Street"})
    bus.publish(topics.ORDER_SUBMIT)
    return at_address_step


class TestRouting:
    def test_address_result_goes_to_address_form(self, at_address_step, bus, views):
        contacts_before = len(views.contacts_form.calls)

        bus.publish(topics.FORM_FIELD_CHANGED, {"field": "address", "value": "Main street 1"})

        assert views.address_form.last.valid is True
        assert len(views.contacts_form.calls) == contacts_before

    def test_contacts_result_goes_to_contacts_form(self, at_contacts_step, bus, views):
        address_before = len(views.address_form.calls)

        bus.publish(topics.CONTACTS_FIELD_CHANGED, {"field": "email", "value": "a@b.co"})

        assert views.contacts_form.last.email == "a@b.co"
        assert set(views.contacts_form.last.errors) == {"phone"}
        assert len(views.address_form.calls) == address_before

    def test_result_published_as_plain_mapping_is_accepted(self, at_address_step, bus, views):
        bus.publish(topics.ORDER_VALIDITY_CHANGED, {"step": "address", "is_valid": True, "errors": {}})

        assert views.address_form.last.valid is True


class TestStaleResults:
    def test_contacts_result_dropped_while_address_step_active(self, at_address_step, bus, views):
        address_before = len(views.address_form.calls)

        bus.publish(
            topics.ORDER_VALIDITY_CHANGED,
            ValidationResult(step=WizardStep.CONTACTS, is_valid=False, errors={"email": "Invalid email address"}),
        )

        assert views.contacts_form.calls == []
        assert len(views.address_form.calls) == address_before

    def test_late_address_validation_dropped_on_contacts_step(self, at_contacts_step, store, views):
        address_before = len(views.address_form.calls)
        contacts_before = len(views.contacts_form.calls)

        store.validate(WizardStep.ADDRESS)

        assert len(views.address_form.calls) == address_before
        assert len(views.contacts_form.calls) == contacts_before

    def test_result_with_foreign_fields_dropped(self, at_address_step, bus, views):
        address_before = len(views.address_form.calls)

        bus.publish(
            topics.ORDER_VALIDITY_CHANGED,
            ValidationResult(step=WizardStep.ADDRESS, is_valid=False, errors={"email": "Enter an email address"}),
        )

        assert len(views.address_form.calls) == address_before

    def test_results_dropped_outside_the_wizard(self, presenter, store, views):
        store.validate(WizardStep.ADDRESS)
        store.validate(WizardStep.CONTACTS)

        assert views.address_form.calls == []
        assert views.contacts_form.calls == []

    def test_result_tagged_none_dropped_outside_the_wizard(self, presenter, bus, views):
        bus.publish(topics.ORDER_VALIDITY_CHANGED, {"step": "none", "is_valid": True, "errors": {}})

        assert views.address_form.calls == []
        assert views.contacts_form.calls == []

    def test_result_tagged_none_dropped_on_address_step(self, at_address_step, bus, views):
        address_before = len(views.address_form.calls)

        bus.publish(topics.ORDER_VALIDITY_CHANGED, {"step": "none", "is_valid": True, "errors": {}})

        assert len(views.address_form.calls) == address_before
        assert views.contacts_form.calls == []


class TestFieldChangesOutsideWizard:
    def test_field_is_stored_without_validation(self, presenter, bus, store, published):
        bus.publish(topics.FORM_FIELD_CHANGED, {"field": "address", "value": "Main street 1"})

        assert store.draft.address == "Main street 1"
        assert [topic for topic, _ in published] == [topics.FORM_FIELD_CHANGED]

    def test_unknown_step_name_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            store.validate("payment")

        assert "step" in str(exc_info.value)
