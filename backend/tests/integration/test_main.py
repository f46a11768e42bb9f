"""
Integration tests for the process entry point.
"""

import logging
from unittest.mock import Mock

import pytest
from flask import Flask

import main


@pytest.fixture(autouse=True)
def quiet_startup(monkeypatch, tmp_path):
    # configure_logging replaces root handlers, which would detach caplog
    monkeypatch.setattr(main, "configure_logging", Mock())
    monkeypatch.setattr(main, "load_dotenv", Mock())
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))


class TestMain:
    def test_serves_with_threaded_server(self, monkeypatch):
        run = Mock()
        monkeypatch.setattr(Flask, "run", run)
        monkeypatch.setenv("PORT", "8123")

        assert main.main() == 0
        assert run.call_args.kwargs["port"] == 8123
        assert run.call_args.kwargs["threaded"] is True

    @pytest.mark.parametrize("name", ["PORT", "MAX_UPLOAD_BYTES", "BCRYPT_ROUNDS"])
    def test_malformed_number_exits_non_zero(self, monkeypatch, caplog, name):
        monkeypatch.setenv(name, "abc")

        with caplog.at_level(logging.ERROR, logger="quickscan"):
            assert main.main() == 1

        assert "Configuration error" in caplog.text

    def test_unconfigured_supabase_exits_non_zero(self, monkeypatch, caplog):
        monkeypatch.setenv("STORAGE_TYPE", "supabase")

        with caplog.at_level(logging.ERROR, logger="quickscan"):
            assert main.main() == 1

        assert "Configuration error" in caplog.text

    def test_bind_failure_exits_non_zero(self, monkeypatch):
        monkeypatch.setattr(Flask, "run", Mock(side_effect=OSError("Address already in use")))

        assert main.main() == 1
