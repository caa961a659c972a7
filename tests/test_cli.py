import sys

import pytest
import typer
from typer.testing import CliRunner

from conftest import TOKEN
from permitdesk.adapters.credential_store import FileCredentialStore
from permitdesk.cli.main import app, list_params, parse_filters
from permitdesk.core.domain.credentials import CredentialRecord

runner = CliRunner()


@pytest.fixture
def credentials_path(tmp_path, monkeypatch):
    path = tmp_path / "credentials.json"
    monkeypatch.setenv("PERMITDESK_CREDENTIALS_PATH", str(path))
    monkeypatch.setenv("PERMITDESK_API_URL", "http://127.0.0.1:9")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return path


class TestParseFilters:
    def test_pairs_keep_order(self):
        assert parse_filters(["status=active", "domain_id=3"]) == {"status": "active", "domain_id": "3"}

    def test_value_may_contain_equals(self):
        assert parse_filters(["name=a=b"]) == {"name": "a=b"}

    def test_missing_equals_is_rejected(self):
        with pytest.raises(typer.BadParameter):
            parse_filters(["status"])

    def test_none_is_empty(self):
        assert parse_filters(None) == {}


class TestListParams:
    def test_page_filter_survives_without_option(self):
        assert list_params(["page=3", "status=active"]) == {"page": "3", "status": "active"}

    def test_options_override_filters(self):
        assert list_params(["page=3"], page=5, limit=20) == {"page": 5, "limit": 20}

    def test_nothing_given_is_none(self):
        assert list_params(None) is None


def test_list_without_session_exits(credentials_path):
    result = runner.invoke(app, ["list", "permits"])

    assert result.exit_code == 1


def test_unknown_resource_is_a_usage_error(credentials_path):
    result = runner.invoke(app, ["list", "widgets"])

    assert result.exit_code == 2


def test_login_refused_when_already_signed_in(credentials_path, admin_user):
    FileCredentialStore(credentials_path).commit(CredentialRecord(token=TOKEN, user=admin_user))

    result = runner.invoke(app, ["login", "-u", "admin", "-p", "secret"])

    assert result.exit_code == 1


def test_whoami_shows_stored_session(credentials_path, admin_user, head_office):
    FileCredentialStore(credentials_path).commit(CredentialRecord(token=TOKEN, user=admin_user, domain=head_office))

    result = runner.invoke(app, ["whoami"])

    assert result.exit_code == 0
    assert "admin" in result.output
    assert "Head Office" in result.output


def test_logout_removes_the_session(credentials_path, admin_user):
    FileCredentialStore(credentials_path).commit(CredentialRecord(token=TOKEN, user=admin_user))

    result = runner.invoke(app, ["logout"])

    assert result.exit_code == 0
    assert not credentials_path.exists()


def test_set_url_rejects_non_http(credentials_path):
    result = runner.invoke(app, ["doctor", "set-url", "ftp://example.com"])

    assert result.exit_code == 2


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG config dir")
def test_set_url_writes_user_env(credentials_path, tmp_path):
    result = runner.invoke(app, ["doctor", "set-url", "https://permits.example.com/api"])

    assert result.exit_code == 0
    env_file = tmp_path / "config" / "permitdesk" / ".env"
    assert "PERMITDESK_API_URL=https://permits.example.com/api" in env_file.read_text(encoding="utf-8")
