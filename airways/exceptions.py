"""Shared exceptions for the application."""


class DomainError(Exception):
    error_kind = 'domain'

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(DomainError):
    error_kind = 'not_found'

    def __init__(self, message: str):
        super().__init__(message, 404)


class ValidationError(DomainError):
    error_kind = 'validation'

    def __init__(self, message: str):
        super().__init__(message, 422)


class AuthenticationError(DomainError):
    error_kind = 'authentication'

    def __init__(self, message: str = 'Invalid credentials'):
        super().__init__(message, 400)


class UnauthorizedError(DomainError):
    error_kind = 'unauthorized'

    def __init__(self, message: str = 'Could not validate credentials'):
        super().__init__(message, 401)
        self.headers = {'WWW-Authenticate': 'Bearer'}


class RegistrationError(DomainError):
    error_kind = 'registration'

    def __init__(self, message: str):
        super().__init__(message, 400)


class ForbiddenError(DomainError):
    error_kind = 'forbidden'

    def __init__(self, message: str = 'Not enough permissions'):
        super().__init__(message, 403)


class SeatUnavailableError(DomainError):
    error_kind = 'seat_unavailable'

    def __init__(self, flight_id: str, seats):
        self.flight_id = flight_id
        self.seats = list(seats)
        super().__init__(
            f'Seats not available on flight {flight_id}: {", ".join(self.seats)}', 409
        )


class DownstreamError(DomainError):
    """A collaborator (mail transport, image storage) failed."""

    error_kind = 'downstream'

    def __init__(self, message: str):
        super().__init__(message, 502)
