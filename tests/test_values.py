import bcrypt
import pytest

from rideshare.account.errors import (
    InvalidCarPlateError,
    InvalidCPFError,
    InvalidEmailError,
    InvalidNameError,
    PasswordTooShortError,
)
from rideshare.account.values import CPF, CarPlate, Email, Name, Password


@pytest.mark.parametrize("plate", ["ABC9090", "AAA1111"])
def test_valid_car_plate(plate):
    assert CarPlate(plate).value == plate


@pytest.mark.parametrize("plate", ["ABC909", "AA1111", "A1A1111", "AAA11B1"])
def test_invalid_car_plate(plate):
    with pytest.raises(InvalidCarPlateError):
        CarPlate(plate)


@pytest.mark.parametrize("number", ["97456321558", "71428793860", "87748248800"])
def test_valid_cpf(number):
    assert CPF(number).value == number


@pytest.mark.parametrize("number", ["9745632155", "11111111111", "97a56321558"])
def test_invalid_cpf(number):
    with pytest.raises(InvalidCPFError):
        CPF(number)


@pytest.mark.parametrize("address", ["john.doe@example.com", "gil.bil@example.com"])
def test_valid_email(address):
    assert Email(address).value == address


@pytest.mark.parametrize("address", ["johndoecom", "gilbil.com"])
def test_invalid_email(address):
    with pytest.raises(InvalidEmailError):
        Email(address)


@pytest.mark.parametrize("value", ["John Doe", "Gil Bil"])
def test_valid_name(value):
    assert Name(value).value == value


@pytest.mark.parametrize("value", ["John", "Gil", "", "Fsads "])
def test_invalid_name(value):
    with pytest.raises(InvalidNameError):
        Name(value)


def test_value_objects_compare_by_value():
    assert Name("John Doe") == Name("John Doe")
    assert Email("john.doe@example.com") != Email("gil.bil@example.com")


def test_password_is_hashed_and_matches():
    password = "password"
    hashed = Password.create(password)
    assert hashed.value != password
    assert hashed.matches(password)
    assert not hashed.matches("secret")
    assert bcrypt.checkpw(password.encode(), hashed.value.encode())


def test_password_too_short():
    with pytest.raises(PasswordTooShortError):
        Password.create("token")


def test_password_length_counts_characters():
    # Six characters, more than six bytes.
    assert Password.create("ééééé1").matches("ééééé1")


def test_password_too_long_for_bcrypt():
    with pytest.raises(ValueError):
        Password.create("secret" * 13)


def test_password_hashes_are_salted():
    password = "password"
    first = Password.create(password)
    second = Password.create(password)
    assert first.value != second.value
    assert first.value.startswith("$2")
    assert first.matches(password)
    assert second.matches(password)