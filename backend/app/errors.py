"""Domain errors raised by the thread controller and its collaborators.

Each error carries the HTTP status it maps to; ``backend.app.main`` registers
one exception handler that turns them into JSON bodies.
"""

from pydantic import ValidationError as PydanticValidationError


class AppError(Exception):
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def to_body(self) -> dict:
        return {"detail": self.detail}


class NotFoundError(AppError):
    status_code = 404


class BadRequestError(AppError):
    status_code = 400


class ConflictError(AppError):
    status_code = 409


class AuthenticationError(AppError):
    status_code = 401

    def __init__(self, detail: str = "Unauthenticated") -> None:
        super().__init__(detail)


class AuthorizationError(AppError):
    status_code = 403

    def __init__(self, detail: str = "This action is unauthorized") -> None:
        super().__init__(detail)


class ValidationError(AppError):
    """Field-level validation failure.

    ``errors`` maps a field name to the list of messages for that field,
    e.g. ``{"channel_id": ["The selected channel is invalid."]}``.
    """

    status_code = 422

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("The given data was invalid.")
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        return cls(field_errors(exc.errors()))

    def to_body(self) -> dict:
        return {"message": self.detail, "errors": self.errors}


def field_errors(errors: list[dict] | tuple) -> dict[str, list[str]]:
    """Collapse pydantic/FastAPI error dicts into ``{field: [messages]}``."""
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = list(err.get("loc", ()))
        # FastAPI prefixes the request part; a model field may itself be called "body"
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        field = str(loc[-1]) if loc else "__root__"
        message = err.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        message = message.removeprefix("Value error, ")
        grouped.setdefault(field, []).append(message)
    return grouped
