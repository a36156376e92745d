import logging
import webbrowser

from booking_engine.application.interfaces.checkout_launcher import CheckoutLauncher

logger = logging.getLogger(__name__)


class BrowserCheckoutLauncher(CheckoutLauncher):
    """Opens the checkout page in a new browser tab."""

    def open(self, checkout_url: str) -> None:
        opened = webbrowser.open_new_tab(checkout_url)
        if not opened:
            logger.warning(
                "No browser available to open checkout",
                extra={"checkout_url": checkout_url},
            )


class RecordingCheckoutLauncher(CheckoutLauncher):
    """Keeps the URLs instead of opening them (headless runs, tests)."""

    def __init__(self) -> None:
        self.opened: list[str] = []

    def open(self, checkout_url: str) -> None:
        self.opened.append(checkout_url)
