class StoreError(Exception):
    """Base class for errors a store surfaces to its caller."""

    message = "An error occurred"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidCredentials(StoreError):
    message = "Invalid email or password"


class EmailAlreadyRegistered(StoreError):
    message = "User with this email already exists"


class AuthenticationInProgress(StoreError):
    message = "Authentication already in progress"


class InvalidPromoCode(StoreError):
    message = "Invalid promo code"


class CheckoutError(StoreError):
    pass


class NotAuthenticated(CheckoutError):
    message = "Please log in to checkout"


class EmptyCart(CheckoutError):
    message = "Your cart is empty"


class PersistedDataCorrupt(Exception):
    """
    A snapshot blob could not be decoded.
    Never leaves a store: the snapshot is discarded and state reset instead.
    """
