import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

logger = logging.getLogger(__name__)


# --- Custom Exceptions ---


class AccountAlreadyExistsException(Exception):
    def __init__(self):
        super().__init__(
            "An account already exists for this email. "
            "Try logging in instead of requesting a new code."
        )


class CodeCooldownException(Exception):
    def __init__(self, retry_after_seconds: int):
        super().__init__("Please wait before requesting another code.")
        self.retry_after_seconds = retry_after_seconds


class TooManyCodeRequestsException(Exception):
    def __init__(self, retry_after_seconds: int):
        super().__init__("Too many code requests. Try again later.")
        self.retry_after_seconds = retry_after_seconds


class VerificationExpiredException(Exception):
    def __init__(self):
        super().__init__("Code has expired. Request a new one.")


class IncorrectVerificationCodeException(Exception):
    def __init__(self):
        super().__init__("Incorrect code. Check the digits and try again.")


class EmailProviderNotConfiguredException(Exception):
    def __init__(self):
        super().__init__("Email provider is not configured")


class EmailDeliveryException(Exception):
    pass


class InvalidSubscriptionModeException(Exception):
    def __init__(self):
        super().__init__("Invalid subscription mode")


class AdminTokenException(Exception):
    def __init__(self):
        super().__init__("Invalid admin token")


# --- Exception Handlers ---


def _error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    content = {"error": error, "message": message, **extra}
    return JSONResponse(status_code=status_code, content=content)


def _rate_limited_response(error: str, exc: CodeCooldownException | TooManyCodeRequestsException) -> JSONResponse:
    response = _error_response(429, error, str(exc), retryAfterSeconds=exc.retry_after_seconds)
    response.headers["Retry-After"] = str(exc.retry_after_seconds)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountAlreadyExistsException)
    async def handle_account_exists(request: Request, exc: AccountAlreadyExistsException):
        return _error_response(400, "ACCOUNT_EXISTS", str(exc))

    @app.exception_handler(CodeCooldownException)
    async def handle_cooldown(request: Request, exc: CodeCooldownException):
        return _rate_limited_response("CODE_COOLDOWN", exc)

    @app.exception_handler(TooManyCodeRequestsException)
    async def handle_too_many_sends(request: Request, exc: TooManyCodeRequestsException):
        return _rate_limited_response("TOO_MANY_CODE_REQUESTS", exc)

    @app.exception_handler(VerificationExpiredException)
    async def handle_expired(request: Request, exc: VerificationExpiredException):
        return _error_response(400, "VERIFICATION_EXPIRED", str(exc))

    @app.exception_handler(IncorrectVerificationCodeException)
    async def handle_incorrect_code(request: Request, exc: IncorrectVerificationCodeException):
        return _error_response(400, "INCORRECT_CODE", str(exc))

    @app.exception_handler(EmailProviderNotConfiguredException)
    async def handle_provider_missing(request: Request, exc: EmailProviderNotConfiguredException):
        return _error_response(500, "EMAIL_PROVIDER_NOT_CONFIGURED", str(exc))

    @app.exception_handler(EmailDeliveryException)
    async def handle_delivery_failure(request: Request, exc: EmailDeliveryException):
        return _error_response(502, "EMAIL_DELIVERY_FAILED", str(exc))

    @app.exception_handler(InvalidSubscriptionModeException)
    async def handle_invalid_mode(request: Request, exc: InvalidSubscriptionModeException):
        return _error_response(400, "INVALID_SUBSCRIPTION_MODE", str(exc))

    @app.exception_handler(AdminTokenException)
    async def handle_admin_token(request: Request, exc: AdminTokenException):
        return _error_response(403, "FORBIDDEN", str(exc))

    @app.exception_handler(ValueError)
    async def handle_value_error(request: Request, exc: ValueError):
        return _error_response(400, "VALIDATION_ERROR", str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return _error_response(400, "VALIDATION_ERROR", _first_error_message(exc.errors()))

    @app.exception_handler(ValidationError)
    async def handle_pydantic_validation(request: Request, exc: ValidationError):
        return _error_response(400, "VALIDATION_ERROR", _first_error_message(exc.errors()))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error("[GlobalExceptionHandler] Unhandled exception", exc_info=exc)
        return _error_response(500, "INTERNAL_ERROR", "Something went wrong. Please try again later.")


def _first_error_message(errors) -> str:
    first_error = errors[0] if errors else None
    if not first_error:
        return "Invalid request."
    message = first_error.get("msg", "Invalid request.")
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")
