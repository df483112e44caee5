import uuid

import bcrypt
import pytest

from rideshare.account.entity import create_account, new_account
from rideshare.account.errors import (
    InvalidCarPlateError,
    InvalidCPFError,
    InvalidEmailError,
    InvalidNameError,
    PasswordTooShortError,
)

EMAIL = "john.doe@example.com"
CPF_NUMBER = "97456321558"


def test_create_account_without_id():
    password = "password"
    account = create_account("John Doe", EMAIL, CPF_NUMBER, "AAA1234", password, True, False)
    assert str(uuid.UUID(account.id)) == account.id
    assert account.name == "John Doe"
    assert account.email == EMAIL
    assert account.cpf == CPF_NUMBER
    assert account.car_plate == ""
    assert bcrypt.checkpw(password.encode(), account.password.value.encode())
    assert account.is_passenger is True
    assert account.is_driver is False


def test_create_account_with_id():
    account_id = str(uuid.uuid4())
    password = "password"
    account = new_account(account_id, "John Doe", EMAIL, CPF_NUMBER, "AAA1234", password, True, False)
    assert account.id == account_id
    assert account.name == "John Doe"
    assert account.email == EMAIL
    assert account.cpf == CPF_NUMBER
    assert account.car_plate == ""
    assert account.is_passenger is True
    assert account.is_driver is False
    assert account.password.matches(password)


def test_create_account_with_invalid_name():
    password = "password"
    with pytest.raises(InvalidNameError) as info:
        new_account(str(uuid.uuid4()), "John", EMAIL, CPF_NUMBER, "AAA1234", password, True, False)
    assert str(info.value) == "invalid name"


def test_car_plate_empty_for_passenger():
    password = "password"
    account = new_account(str(uuid.uuid4()), "John Doe", EMAIL, CPF_NUMBER, "", password, True, False)
    assert account.car_plate == ""


def test_driver_keeps_car_plate():
    password = "password"
    account = new_account(str(uuid.uuid4()), "John Doe", EMAIL, CPF_NUMBER, "ABC9090", password, False, True)
    assert account.car_plate == "ABC9090"
    assert account.is_driver is True


def test_driver_with_invalid_car_plate():
    password = "password"
    with pytest.raises(InvalidCarPlateError):
        new_account(str(uuid.uuid4()), "John Doe", EMAIL, CPF_NUMBER, "AA1111", password, False, True)


def test_invalid_email_and_cpf_rejected():
    password = "password"
    with pytest.raises(InvalidEmailError):
        new_account("id", "John Doe", "johndoecom", CPF_NUMBER, "", password, True, False)
    with pytest.raises(InvalidCPFError):
        new_account("id", "John Doe", EMAIL, "11111111111", "", password, True, False)


def test_short_password_rejected():
    with pytest.raises(PasswordTooShortError):
        new_account("id", "John Doe", EMAIL, CPF_NUMBER, "", "token", True, False)


def test_car_plate_checked_before_password_for_driver():
    with pytest.raises(InvalidCarPlateError):
        new_account("id", "John Doe", EMAIL, CPF_NUMBER, "bad", "token", False, True)


def test_create_account_ids_are_unique():
    password = "password"
    first = create_account("John Doe", EMAIL, CPF_NUMBER, "", password, True, False)
    second = create_account("John Doe", EMAIL, CPF_NUMBER, "", password, True, False)
    assert first.id != second.id
    assert first.name == second.name