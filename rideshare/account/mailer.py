"""Outgoing e-mail."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MailerGateway(ABC):
    """Sends messages to account holders."""

    @abstractmethod
    def send(self, recipient: str, subject: str, message: str) -> None:
        """Deliver a message to a recipient."""


class MailerGatewayMemory(MailerGateway):
    """A mailer that writes each message to standard output."""

    def send(self, recipient: str, subject: str, message: str) -> None:
        print(
            f"sending message: {message} to {recipient} with subject: {subject}",
            end="",
        )