"""Domain exceptions for the captive portal.

Services raise these; the API layer maps them to HTTP responses in
``captiveportal.infrastructure.api.app``.
"""


class PortalError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailedError(PortalError):
    """Raised when input is well-formed JSON but semantically invalid."""

    def __init__(self, message: str, field: str | None = None, code: str = "invalid") -> None:
        super().__init__(message)
        self.field = field
        self.code = code


class InvalidPhoneFormatError(ValidationFailedError):
    """Raised when a phone number does not match the national mobile format."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid Nigerian phone number format. Use format: 08012345678",
            field="phone_number",
            code="invalid_phone_number",
        )


class NoFieldsToUpdateError(ValidationFailedError):
    """Raised when an update request carries no fields."""

    def __init__(self) -> None:
        super().__init__("No valid fields to update", code="no_fields")


class DuplicateResourceError(PortalError):
    """Raised when a unique field already holds the submitted value."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field


class DuplicateEmailError(DuplicateResourceError):
    def __init__(self) -> None:
        super().__init__("Email already registered", field="email")


class DuplicatePhoneError(DuplicateResourceError):
    def __init__(self) -> None:
        super().__init__("Phone number already registered", field="phone_number")


class DuplicateUsernameError(DuplicateResourceError):
    def __init__(self) -> None:
        super().__init__("Username already exists", field="username")


class AuthenticationError(PortalError):
    """Raised for bad credentials or inactive accounts.

    The message is the same for every cause so callers cannot tell an
    unknown account from a wrong secret.
    """

    def __init__(self, message: str = "Invalid credentials or account is inactive") -> None:
        super().__init__(message)


class NotFoundError(PortalError):
    """Raised when a referenced resource does not exist."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource
