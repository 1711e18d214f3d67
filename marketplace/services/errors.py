from typing import List


class CheckoutError(Exception):
    """Checkout action rejected by a business rule."""


class EmptyCartError(CheckoutError):
    pass


class InvalidTransitionError(CheckoutError):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move checkout from '{current.value}' to '{target.value}'")


class IncompleteBillingError(CheckoutError):
    def __init__(self, missing_fields: List[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            "Billing details incomplete: missing " + ", ".join(self.missing_fields)
        )


class CartLineNotFound(CheckoutError):
    pass


class DisputeError(Exception):
    pass
