import pytest

from rideshare.account.mailer import MailerGateway, MailerGatewayMemory


def test_memory_mailer_prints_message(capsys):
    MailerGatewayMemory().send("john.doe@example.com", "Welcome!", "...")
    out = capsys.readouterr().out
    assert out == "sending message: ... to john.doe@example.com with subject: Welcome!"


def test_memory_mailer_mentions_every_part(capsys):
    MailerGatewayMemory().send("jane@example.com", "Hello", "body text")
    out = capsys.readouterr().out
    assert "body text" in out
    assert "jane@example.com" in out
    assert out.endswith("Hello")


def test_mailer_gateway_is_abstract():
    with pytest.raises(TypeError):
        MailerGateway()