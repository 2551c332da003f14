class BookingError(Exception):
    """Base class for errors surfaced by the booking use cases."""
    pass


class ValidationError(BookingError, ValueError):
    """Raised when input is malformed (empty name/phone, bad time label, past date)."""
    pass


class ParseError(ValidationError):
    """Raised when a time label does not match the "h:mm AM|PM" shape."""
    pass


class NotFound(BookingError, LookupError):
    """Raised when a booking or service identifier is unknown."""
    pass


class InvalidTransition(BookingError):
    """Raised when a status change is not allowed from the booking's current status."""

    def __init__(self, booking_id: str, current: str, target: str) -> None:
        super().__init__(f"Booking {booking_id} cannot move from {current} to {target}")
        self.booking_id = booking_id
        self.current = current
        self.target = target


class PaymentInitError(BookingError):
    """Raised when the payment processor fails to create a checkout session."""
    pass


class AuthenticationError(BookingError):
    """Raised when an operator session is missing, invalid or expired."""
    pass


class StoreError(BookingError, RuntimeError):
    """Raised when the datastore fails (timeouts, network errors, bad responses)."""
    pass
