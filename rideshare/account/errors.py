"""Errors raised by the account service."""

from __future__ import annotations


class DomainError(Exception):
    """A business rule was broken by the caller's input."""

    message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidNameError(DomainError):
    message = "invalid name"


class InvalidEmailError(DomainError):
    message = "invalid email"


class InvalidCPFError(DomainError):
    message = "invalid CPF"


class PasswordTooShortError(DomainError):
    message = "password must be greater than 5 characters"


class InvalidCarPlateError(DomainError):
    message = "invalid car plate"


class EmailAlreadyTakenError(DomainError):
    message = "email already taken"


class InfrastructureError(Exception):
    """A failure outside the domain, such as storage."""

    message = "infrastructure error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class SavingAccountError(InfrastructureError):
    message = "error saving account to database"


class DatabaseError(InfrastructureError):
    message = "error connecting to database"


class AccountNotFoundError(LookupError):
    """No account exists for the requested identifier."""

    def __init__(self, message: str = "account not found") -> None:
        super().__init__(message)


def all_domain_errors() -> tuple[type[DomainError], ...]:
    """Every domain error class, usable directly in an ``except`` clause."""
    return (
        InvalidNameError,
        InvalidEmailError,
        InvalidCPFError,
        PasswordTooShortError,
        InvalidCarPlateError,
        EmailAlreadyTakenError,
    )


def all_infra_errors() -> tuple[type[InfrastructureError], ...]:
    """Every infrastructure error class."""
    return (SavingAccountError, DatabaseError)