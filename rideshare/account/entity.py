"""The account entity."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from rideshare.account.errors import InvalidCarPlateError
from rideshare.account.values import CPF, CarPlate, Email, Name, Password


@dataclass
class Account:
    """A registered passenger or driver."""

    id: str
    name: str
    email: str
    cpf: str
    car_plate: str
    password: Password = field(repr=False)
    is_passenger: bool
    is_driver: bool


def new_account(
    account_id: str,
    name: str,
    email: str,
    cpf: str,
    car_plate: str,
    password: str,
    is_passenger: bool,
    is_driver: bool,
) -> Account:
    """Build an account with the given id, validating every field."""
    valid_name = Name(name)
    valid_email = Email(email)
    valid_cpf = CPF(cpf)
    plate: CarPlate | None
    try:
        plate = CarPlate(car_plate)
    except InvalidCarPlateError:
        if is_driver:
            raise
        plate = None
    if is_passenger:
        plate = None
    hashed = Password.create(password)
    return Account(
        id=account_id,
        name=valid_name.value,
        email=valid_email.value,
        cpf=valid_cpf.value,
        car_plate=plate.value if plate is not None else "",
        password=hashed,
        is_passenger=is_passenger,
        is_driver=is_driver,
    )


def create_account(
    name: str,
    email: str,
    cpf: str,
    car_plate: str,
    password: str,
    is_passenger: bool,
    is_driver: bool,
) -> Account:
    """Build a new account with a freshly generated id."""
    return new_account(
        str(uuid.uuid4()), name, email, cpf, car_plate, password, is_passenger, is_driver
    )