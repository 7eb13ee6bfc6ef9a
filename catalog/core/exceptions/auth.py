"""Authentication and authorization errors."""

from catalog.core.exceptions.base import CatalogError


class MissingTokenError(CatalogError):
    def __init__(self) -> None:
        super().__init__("Missing authorization header")


class InvalidTokenError(CatalogError):
    """Malformed, expired or wrongly signed access token."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class ForbiddenRoleError(CatalogError):
    def __init__(self, required_role: str) -> None:
        self.required_role = required_role
        super().__init__(f"{required_role} role required")


class InvalidCredentialsError(CatalogError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class EmailAlreadyRegisteredError(CatalogError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class InvalidPasswordError(CatalogError):
    """Password does not satisfy the minimum policy or current password mismatch."""


class AdminRegistrationDisabledError(CatalogError):
    def __init__(self) -> None:
        super().__init__("Admin registration is disabled")
