class GradpassError(Exception):
    """Base class for errors reported to callers of the ticket core.

    Each subclass carries a stable ``error_code`` for API clients and the
    HTTP status the API layer answers with.
    """

    error_code = "gradpass_error"
    status_code = 400

    def __init__(self, detail: str = ""):
        self.detail = detail or self.__class__.__doc__.strip().splitlines()[0]
        super().__init__(self.detail)


class QuotaExceededByType(GradpassError):
    """The issuer already holds the maximum number of tickets of this type."""

    error_code = "quota_exceeded_by_type"
    status_code = 409


class QuotaExceededGlobal(GradpassError):
    """The issuer already holds the maximum number of tickets overall."""

    error_code = "quota_exceeded_global"
    status_code = 409


class MissingGuestName(GradpassError):
    """This ticket type requires a guest name."""

    error_code = "missing_guest_name"
    status_code = 422


class UnknownTicketType(GradpassError):
    """Ticket type is not one of graduate, sponsor or family."""

    error_code = "unknown_ticket_type"
    status_code = 422


class CodeCollision(GradpassError):
    """A ticket with this redemption code already exists."""

    error_code = "code_collision"
    status_code = 409


class CodeCollisionExhausted(GradpassError):
    """Could not generate a unique redemption code."""

    error_code = "code_collision_exhausted"
    status_code = 500


class TicketNotFound(GradpassError):
    """Ticket not found."""

    error_code = "ticket_not_found"
    status_code = 404


class IssuerNotFound(GradpassError):
    """Issuer not found."""

    error_code = "issuer_not_found"
    status_code = 404


class IssuerAlreadyExists(GradpassError):
    """An issuer with this name is already registered."""

    error_code = "issuer_already_exists"
    status_code = 409


class StoreUnavailable(GradpassError):
    """The ticket store is temporarily unavailable."""

    error_code = "store_unavailable"
    status_code = 503
