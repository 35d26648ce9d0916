"""Storefront command line client.

Runs the storefront core against the product/order API with text views.

Usage:
    storefront catalog
    storefront checkout --product ID [--product ID ...] --address "..." \\
        --email a@b.co --phone +71234567890 [--payment cash]

API locations come from STOREFRONT_API_URL / STOREFRONT_CDN_URL unless
given with --api-url / --cdn-url.
"""

import argparse
import sys

from storefront.api.client import CatalogApi
from storefront.app import build_storefront, create_api
from storefront.checkout.order import PaymentMethod
from storefront.checkout.steps import ScreenState, WizardStep
from storefront.config import Settings
from storefront.events import topics
from storefront.utils.logging import add_context, clear_context, configure_logging
from storefront.views.console import console_views


def list_catalog(settings: Settings, api: CatalogApi, stream=None) -> int:
    """Print the catalog. Returns the process exit code."""
    storefront = build_storefront(api, console_views(stream), settings)
    if not storefront.start():
        print("Catalog is unavailable.", file=sys.stderr)
        return 1
    return 0


def run_checkout(
    settings: Settings,
    api: CatalogApi,
    product_ids: list[str],
    address: str,
    email: str,
    phone: str,
    payment: str = PaymentMethod.CARD.value,
    stream=None,
) -> int:
    """Drive the whole wizard through the bus, as a user would."""
    storefront = build_storefront(api, console_views(stream), settings)
    if not storefront.start():
        print("Catalog is unavailable.", file=sys.stderr)
        return 1

    bus = storefront.bus
    presenter = storefront.presenter

    for product_id in product_ids:
        bus.publish(topics.PRODUCT_ADD, {"id": product_id})

    bus.publish(topics.BASKET_OPEN)
    bus.publish(topics.ORDER_OPEN)
    if presenter.active_step is not WizardStep.ADDRESS:
        return 1

    bus.publish(topics.PAYMENT_CHANGED, {"method": payment})
    bus.publish(topics.FORM_FIELD_CHANGED, {"field": "address", "value": address})
    bus.publish(topics.ORDER_SUBMIT)
    if presenter.active_step is not WizardStep.CONTACTS:
        return 1

    bus.publish(topics.CONTACTS_FIELD_CHANGED, {"field": "email", "value": email})
    bus.publish(topics.CONTACTS_FIELD_CHANGED, {"field": "phone", "value": phone})
    bus.publish(topics.CONTACTS_SUBMIT)
    if presenter.state is not ScreenState.SUCCESS_SHOWN:
        return 1

    bus.publish(topics.SUCCESS_CLOSE)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront", description="Storefront command line client")
    parser.add_argument("--api-url", help="Product/order API base url")
    parser.add_argument("--cdn-url", help="Base url prepended to product images")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("catalog", help="List the catalog")

    checkout = subparsers.add_parser("checkout", help="Buy products through the checkout wizard")
    checkout.add_argument("--product", dest="products", action="append", required=True, help="Product id to buy")
    checkout.add_argument(
        "--payment",
        choices=[method.value for method in PaymentMethod],
        default=PaymentMethod.CARD.value,
    )
    checkout.add_argument("--address", required=True)
    checkout.add_argument("--email", required=True)
    checkout.add_argument("--phone", required=True)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    overrides = {"api_url": args.api_url, "cdn_url": args.cdn_url}
    settings = settings.model_copy(update={key: value for key, value in overrides.items() if value})

    configure_logging(settings.environment, settings.log_dir)
    add_context(command=args.command)

    api = create_api(settings)
    try:
        if args.command == "catalog":
            return list_catalog(settings, api)
        return run_checkout(
            settings,
            api,
            product_ids=args.products,
            address=args.address,
            email=args.email,
            phone=args.phone,
            payment=args.payment,
        )
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
