"""Shared BDD fixtures and step definitions for the storefront wizard."""

from pytest_bdd import given, parsers, then, when
from storefront.checkout.steps import ScreenState, WizardStep
from storefront.events import topics


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the storefront has loaded its catalog", target_fixture="storefront")
def storefront_loaded(presenter):
    return presenter


@given(parsers.cfparse('the product "{product_id}" is in the cart'))
def product_in_cart(storefront, bus, product_id):
    bus.publish(topics.PRODUCT_ADD, {"id": product_id})


@given("the checkout wizard is open")
def wizard_open(storefront, bus):
    bus.publish(topics.WIZARD_OPEN)
    assert storefront.active_step is WizardStep.ADDRESS


@given(parsers.cfparse('the address step is completed with "{address}"'))
def address_step_completed(storefront, bus, address):
    bus.publish(topics.FORM_FIELD_CHANGED, {"field": "address", "value": address})
    bus.publish(topics.ORDER_SUBMIT)
    assert storefront.active_step is WizardStep.CONTACTS


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the customer adds the product "{product_id}"'))
def customer_adds(bus, product_id):
    bus.publish(topics.PRODUCT_ADD, {"id": product_id})


@when(parsers.cfparse('the customer removes the product "{product_id}"'))
def customer_removes(bus, product_id):
    bus.publish(topics.PRODUCT_REMOVE, {"id": product_id})


@when("the customer opens the checkout")
def customer_opens_checkout(bus):
    bus.publish(topics.WIZARD_OPEN)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} item"))
def cart_has_n_items_singular(store, count):
    assert len(store.cart) == count


@then(parsers.cfparse("the cart has {count:d} items"))
def cart_has_n_items(store, count):
    assert len(store.cart) == count


@then(parsers.cfparse("the cart total is {total:d}"))
def cart_total_is(store, total):
    assert store.cart_total() == total


@then(parsers.cfparse("the basket counter shows {count:d}"))
def basket_counter_shows(views, count):
    assert views.page.counter == count


@then(parsers.cfparse('the screen is "{state}"'))
def screen_is(storefront, state):
    assert storefront.state is ScreenState(state)


@then(parsers.cfparse('the customer is alerted "{message}"'))
def customer_alerted(views, message):
    assert views.notifier.alerts[-1] == message
