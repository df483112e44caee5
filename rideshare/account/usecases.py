"""Account use cases: signing up and looking an account up."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rideshare.account.entity import create_account
from rideshare.account.errors import (
    AccountNotFoundError,
    EmailAlreadyTakenError,
    SavingAccountError,
)
from rideshare.account.mailer import MailerGateway
from rideshare.account.repository import AccountRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetAccountOutput:
    id: str
    name: str
    email: str
    cpf: str
    car_plate: str
    is_passenger: bool
    is_driver: bool


class GetAccount:
    """Look up an account by its id."""

    def __init__(self, account_repository: AccountRepository) -> None:
        self._account_repository = account_repository

    def execute(self, account_id: str) -> GetAccountOutput:
        try:
            account = self._account_repository.get_account_by_id(account_id)
        except Exception as err:
            raise AccountNotFoundError() from err
        return GetAccountOutput(
            id=account_id,
            name=account.name,
            email=account.email,
            cpf=account.cpf,
            car_plate=account.car_plate,
            is_passenger=account.is_passenger,
            is_driver=account.is_driver,
        )


@dataclass(frozen=True)
class SignUpInput:
    name: str
    email: str
    cpf: str
    car_plate: str
    is_passenger: bool
    is_driver: bool
    password: str = field(repr=False)


@dataclass(frozen=True)
class SignUpOutput:
    account_id: str


class SignUp:
    """Register a new account and welcome its holder."""

    def __init__(self, account_repository: AccountRepository, mailer: MailerGateway) -> None:
        self._account_repository = account_repository
        self._mailer = mailer

    def execute(self, input_data: SignUpInput) -> SignUpOutput:
        account = create_account(
            input_data.name,
            input_data.email,
            input_data.cpf,
            input_data.car_plate,
            input_data.password,
            input_data.is_passenger,
            input_data.is_driver,
        )
        try:
            self._account_repository.get_account_by_email(input_data.email)
        except AccountNotFoundError:
            pass
        else:
            raise EmailAlreadyTakenError()

        try:
            self._account_repository.save_account(account)
        except Exception as err:
            logger.error("saving account failed: %s", err)
            raise SavingAccountError() from err

        self._mailer.send(account.email, "Welcome!", "...")
        return SignUpOutput(account_id=account.id)