"""Text views that print the storefront to a stream.

Used by the command line client to run the storefront without a browser.
"""

import sys

from storefront.views.contracts import Panel, StorefrontViews
from storefront.views.data import AddressFormData, CardData, CartViewData, ContactsFormData, SuccessData


class _ConsoleView:
    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def _write(self, line: str = "") -> None:
        print(line, file=self.stream)


def _card_line(card: CardData) -> str:
    prefix = f"{card.index}. " if card.index is not None else ""
    state = " (unavailable)" if card.button_disabled else ""
    return f"{prefix}[{card.id}] {card.title} · {card.category} · {card.price_label} -> {card.button_text}{state}"


def _error_lines(errors: dict[str, str]) -> list[str]:
    return [f"  ! {field}: {message}" for field, message in sorted(errors.items())]


class ConsolePage(_ConsoleView):
    def __init__(self, stream=None):
        super().__init__(stream)
        self.counter = 0
        self.locked = False

    def render_catalog(self, cards: list[CardData]) -> None:
        self._write(f"Catalog ({len(cards)} products)")
        for card in cards:
            self._write(f"  {_card_line(card)}")

    def set_counter(self, count: int) -> None:
        self.counter = count
        self._write(f"Cart: {count}")

    def set_locked(self, locked: bool) -> None:
        self.locked = locked


class ConsoleModal(_ConsoleView):
    def __init__(self, stream=None):
        super().__init__(stream)
        self.panel = None

    def show(self, panel: Panel) -> None:
        self.panel = panel
        self._write(f"== {panel.value} ==")

    def hide(self) -> None:
        self.panel = None


class ConsolePreview(_ConsoleView):
    def render(self, data: CardData) -> None:
        self._write(_card_line(data))
        if data.description:
            self._write(f"  {data.description}")


class ConsoleCart(_ConsoleView):
    def render(self, data: CartViewData) -> None:
        for item in data.items:
            self._write(f"  {_card_line(item)}")
        self._write(f"Total: {data.total_label} [{data.button_text}]")


class ConsoleAddressForm(_ConsoleView):
    def render(self, data: AddressFormData) -> None:
        status = "ready" if data.valid else "incomplete"
        self._write(f"Payment: {data.payment} · Address: {data.address or '-'} ({status})")
        for line in _error_lines(data.errors):
            self._write(line)


class ConsoleContactsForm(_ConsoleView):
    def render(self, data: ContactsFormData) -> None:
        status = "ready" if data.valid else "incomplete"
        self._write(f"Email: {data.email or '-'} · Phone: {data.phone or '-'} ({status})")
        for line in _error_lines(data.errors):
            self._write(line)


class ConsoleSuccess(_ConsoleView):
    def render(self, data: SuccessData) -> None:
        self._write(f"Order {data.order_id} placed. {data.message}")


class ConsoleNotifier(_ConsoleView):
    def __init__(self, stream=None):
        super().__init__(stream or sys.stderr)

    def alert(self, message: str) -> None:
        self._write(f"ALERT: {message}")


def console_views(stream=None, error_stream=None) -> StorefrontViews:
    """A complete view set writing to ``stream`` (alerts to ``error_stream``)."""
    return StorefrontViews(
        page=ConsolePage(stream),
        modal=ConsoleModal(stream),
        preview=ConsolePreview(stream),
        cart=ConsoleCart(stream),
        address_form=ConsoleAddressForm(stream),
        contacts_form=ConsoleContactsForm(stream),
        success=ConsoleSuccess(stream),
        notifier=ConsoleNotifier(error_stream),
    )
