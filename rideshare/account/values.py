"""Validated value objects that make up an account."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

import bcrypt

from rideshare.account.errors import (
    InvalidCarPlateError,
    InvalidCPFError,
    InvalidEmailError,
    InvalidNameError,
    PasswordTooShortError,
)

_NAME = re.compile(r"[a-zA-Z] [a-zA-Z]+")
_EMAIL = re.compile(r"(.+)@(.+)")
_CAR_PLATE = re.compile(r"[A-Z]{3}[0-9]{4}")
_NON_DIGIT = re.compile(r"[^0-9]")

_CPF_LENGTH = 11
_FIRST_DIGIT_FACTOR = 10
_SECOND_DIGIT_FACTOR = 11

_BCRYPT_COST = 10
_BCRYPT_MAX_BYTES = 72
_MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class Name:
    """A person's name: at least two words."""

    value: str

    def __post_init__(self) -> None:
        if not _NAME.search(self.value):
            raise InvalidNameError()


@dataclass(frozen=True)
class Email:
    """An e-mail address of the form local@domain."""

    value: str

    def __post_init__(self) -> None:
        if not _EMAIL.fullmatch(self.value):
            raise InvalidEmailError()


@dataclass(frozen=True)
class CarPlate:
    """A vehicle plate holding three capital letters followed by four digits."""

    value: str

    def __post_init__(self) -> None:
        if not _CAR_PLATE.search(self.value):
            raise InvalidCarPlateError()


def _digit_value(char: str) -> int:
    return int(char) if char in "0123456789" else 0


def _cpf_check_digit(value: str, factor: int) -> int:
    total = 0
    for char in value:
        if factor <= 1:
            break
        total += _digit_value(char) * factor - 1
        factor -= 1
    remainder = int(math.fmod(total, 11))
    return 0 if remainder < 2 else 11 - remainder


def _cpf_is_valid(value: str) -> bool:
    if len(_NON_DIGIT.sub("", value)) != _CPF_LENGTH:
        return False
    if len(set(value)) == 1:
        return False
    digits = (
        f"{_cpf_check_digit(value, _FIRST_DIGIT_FACTOR)}"
        f"{_cpf_check_digit(value, _SECOND_DIGIT_FACTOR)}"
    )
    return digits != value[9:]


@dataclass(frozen=True)
class CPF:
    """A Brazilian taxpayer number."""

    value: str

    def __post_init__(self) -> None:
        if not _cpf_is_valid(self.value):
            raise InvalidCPFError()


@dataclass(frozen=True)
class Password:
    """A bcrypt hash of an account password."""

    value: str = field(repr=False)

    @classmethod
    def create(cls, value: str) -> Password:
        """Hash a plain password after checking its length."""
        if len(value) < _MIN_PASSWORD_LENGTH:
            raise PasswordTooShortError()
        raw = value.encode("utf-8")
        if len(raw) > _BCRYPT_MAX_BYTES:
            raise ValueError("password length exceeds 72 bytes")
        hashed = bcrypt.hashpw(raw, bcrypt.gensalt(rounds=_BCRYPT_COST))
        return cls(hashed.decode("ascii"))

    def matches(self, value: str) -> bool:
        """Tell whether a plain password hashes to this one."""
        try:
            return bcrypt.checkpw(value.encode("utf-8"), self.value.encode("ascii"))
        except ValueError:
            return False