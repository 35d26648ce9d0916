"""BDD tests for the two-step checkout wizard."""

from pytest_bdd import given, parsers, scenarios, then, when
from storefront.api.client import ApiError
from storefront.events import topics

scenarios("features/checkout_wizard.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the order service is unavailable")
def order_service_unavailable(api):
    api.submit_error = ApiError("HTTP error! Status: 503", status=503)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the customer chooses to pay by "{method}"'))
def choose_payment(bus, method):
    bus.publish(topics.PAYMENT_CHANGED, {"method": method})


@when(parsers.cfparse('the customer enters the address "{address}"'))
def enter_address(bus, address):
    bus.publish(topics.FORM_FIELD_CHANGED, {"field": "address", "value": address})


@when("the customer submits the address step")
def submit_address(bus):
    bus.publish(topics.ORDER_SUBMIT)


@when(parsers.cfparse('the customer enters the email "{email}" and phone "{phone}"'))
def enter_contacts(bus, email, phone):
    bus.publish(topics.CONTACTS_FIELD_CHANGED, {"field": "email", "value": email})
    bus.publish(topics.CONTACTS_FIELD_CHANGED, {"field": "phone", "value": phone})


@when("the customer submits the contacts step")
def submit_contacts(bus):
    bus.publish(topics.CONTACTS_SUBMIT)


@when("the customer closes the modal")
def close_modal(bus):
    bus.publish(topics.MODAL_CLOSE)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the address form shows the error "{field}"'))
def address_form_error(views, field):
    assert field in views.address_form.last.errors


@then(parsers.cfparse('the contacts form shows the error "{field}"'))
def contacts_form_error(views, field):
    assert field in views.contacts_form.last.errors


@then(parsers.cfparse("{count:d} order is sent with a total of {total:d}"))
def order_sent(api, count, total):
    assert len(api.orders) == count
    assert api.orders[-1].total == total


@then(parsers.cfparse("{count:d} orders are sent"))
def orders_sent(api, count):
    assert len(api.orders) == count


@then(parsers.cfparse('the success message reads "{message}"'))
def success_message(views, message):
    assert views.success.last.message == message


@then("the order draft is empty")
def order_draft_empty(store):
    draft = store.draft
    assert (draft.address, draft.email, draft.phone) == ("", "", "")
