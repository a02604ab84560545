"""Logging formatter and admin bootstrap command."""
import json
import logging
import sys

import pytest

from library_api import cli
from library_api.core.logger import JsonLogFormatter, set_request_id
from library_api.models.user import User


def test_json_formatter_includes_request_id_and_extras():
    set_request_id("req-42")
    record = logging.LogRecord("library_api.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.user_id = "u-1"

    line = json.loads(JsonLogFormatter().format(record))

    assert line["message"] == "hello world"
    assert line["level"] == "INFO"
    assert line["request_id"] == "req-42"
    assert line["user_id"] == "u-1"
    assert "status_code" not in line


def test_create_admin_creates_account(db_session, monkeypatch):
    monkeypatch.setattr(
        sys,
        "argv",
        ["library-create-admin", "--email=root@example.com", "--username=root", "--password=Password123"],
    )

    cli.create_admin()

    admin = db_session.query(User).filter(User.email == "root@example.com").one()
    assert admin.role == "admin"
    assert admin.can_authenticate


def test_create_admin_promotes_existing_user(db_session, make_user, monkeypatch):
    user = make_user(status="pending", is_active=False)
    monkeypatch.setattr(
        sys,
        "argv",
        ["library-create-admin", f"--email={user.email}", "--username=ignored", "--password=Password123"],
    )

    cli.create_admin()

    db_session.expire_all()
    promoted = db_session.get(User, user.id)
    assert promoted.role == "admin"
    assert promoted.can_authenticate


def test_create_admin_requires_flags(db_session, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["library-create-admin", "--email=root@example.com"])

    with pytest.raises(SystemExit) as exc_info:
        cli.create_admin()
    assert exc_info.value.code == 2


def test_runserver_announces_and_starts_uvicorn(monkeypatch, capsys):
    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(sys, "argv", ["library-runserver", "--port=9001", "--no-reload"])

    cli.runserver()

    assert "Starting uvicorn on 127.0.0.1:9001 (reload=False)" in capsys.readouterr().out
    assert calls == [("library_api.main:app", {"host": "127.0.0.1", "port": 9001, "reload": False})]
