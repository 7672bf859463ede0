"""
Domain exceptions shared by the marketplace services.

Each error carries the HTTP status it maps to and a short machine-readable
code. `register_error_handlers()` installs one FastAPI handler that renders
any `CirculaError` as ``{"detail": ..., "code": ...}``.
"""
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class CirculaError(Exception):
    """Base class for all domain errors raised by the services."""

    status_code: int = 500
    code: str = "circula_error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(CirculaError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class ForbiddenError(CirculaError):
    status_code = 403
    code = "forbidden"
    default_message = "Access denied"


class ConflictError(CirculaError):
    status_code = 409
    code = "conflict"
    default_message = "Request conflicts with current state"


class ValidationError(CirculaError):
    status_code = 400
    code = "invalid_request"
    default_message = "Invalid request"


# --- Order / payment taxonomy ---

class ItemNotFound(NotFoundError):
    code = "item_not_found"
    default_message = "Item not found"


class ItemAlreadySold(ConflictError):
    code = "item_sold_out"
    default_message = "Item is sold out"


class OrderNotFound(NotFoundError):
    code = "order_not_found"
    default_message = "Order not found"


class OrderAccessDenied(ForbiddenError):
    code = "order_access_denied"
    default_message = "Order does not belong to the current user"


class InvalidCardDetails(ValidationError):
    code = "invalid_card"
    default_message = "Invalid card details"


class PaymentProcessingError(CirculaError):
    """Raised after a rollback caused by an infrastructure failure."""

    status_code = 500
    code = "payment_processing_error"
    default_message = "Error processing payment"


async def circula_error_handler(request: Request, exc: CirculaError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, code=exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CirculaError, circula_error_handler)
