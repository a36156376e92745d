class CheckoutLauncher:
    """Opens the external checkout page in a new context (browser tab, app link...)."""

    def open(self, checkout_url: str) -> None:
        raise NotImplementedError
