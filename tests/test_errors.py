import pytest

from rideshare.account.errors import (
    AccountNotFoundError,
    DatabaseError,
    DomainError,
    EmailAlreadyTakenError,
    InfrastructureError,
    InvalidCarPlateError,
    InvalidCPFError,
    InvalidEmailError,
    InvalidNameError,
    PasswordTooShortError,
    SavingAccountError,
    all_domain_errors,
    all_infra_errors,
)


@pytest.mark.parametrize(
    "error_class, message",
    [
        (InvalidNameError, "invalid name"),
        (InvalidEmailError, "invalid email"),
        (InvalidCPFError, "invalid CPF"),
        (PasswordTooShortError, "password must be greater than 5 characters"),
        (InvalidCarPlateError, "invalid car plate"),
        (EmailAlreadyTakenError, "email already taken"),
        (SavingAccountError, "error saving account to database"),
        (DatabaseError, "error connecting to database"),
        (AccountNotFoundError, "account not found"),
    ],
)
def test_default_messages(error_class, message):
    assert str(error_class()) == message


def test_all_domain_errors_lists_domain_classes():
    assert all_domain_errors() == (
        InvalidNameError,
        InvalidEmailError,
        InvalidCPFError,
        PasswordTooShortError,
        InvalidCarPlateError,
        EmailAlreadyTakenError,
    )
    assert all(issubclass(cls, DomainError) for cls in all_domain_errors())


def test_all_infra_errors_lists_infra_classes():
    assert all_infra_errors() == (SavingAccountError, DatabaseError)
    assert all(issubclass(cls, InfrastructureError) for cls in all_infra_errors())


def test_domain_errors_can_be_caught_together():
    with pytest.raises(all_domain_errors()) as excinfo:
        raise InvalidCPFError()
    assert str(excinfo.value) == "invalid CPF"
    assert isinstance(excinfo.value, DomainError)


def test_not_found_is_not_a_domain_error():
    assert AccountNotFoundError not in all_domain_errors()
    assert not issubclass(AccountNotFoundError, DomainError)
    with pytest.raises(LookupError):
        raise AccountNotFoundError()


def test_custom_message_overrides_default():
    error = InvalidNameError("name is required")
    assert str(error) == "name is required"