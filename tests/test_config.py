from pathlib import Path

from permitdesk.core.config import DEFAULT_API_URL, AppSettings, _parse_env_lines, write_user_env_vars


def test_defaults(monkeypatch):
    monkeypatch.delenv("PERMITDESK_API_URL", raising=False)
    monkeypatch.delenv("NEXT_PUBLIC_API_URL", raising=False)

    settings = AppSettings(_env_file=None)

    assert settings.api_url == DEFAULT_API_URL
    assert settings.http_timeout_seconds is None
    assert settings.signin_path == "/signin"
    assert settings.home_path == "/"


def test_frontend_variable_is_honoured(monkeypatch):
    monkeypatch.delenv("PERMITDESK_API_URL", raising=False)
    monkeypatch.setenv("NEXT_PUBLIC_API_URL", "https://api.example.com/v1")

    assert AppSettings(_env_file=None).api_url == "https://api.example.com/v1"


def test_own_variable_wins(monkeypatch):
    monkeypatch.setenv("PERMITDESK_API_URL", "https://permits.example.com")
    monkeypatch.setenv("NEXT_PUBLIC_API_URL", "https://other.example.com")

    assert AppSettings(_env_file=None).api_url == "https://permits.example.com"


def test_credentials_path_override(monkeypatch, tmp_path):
    monkeypatch.setenv("PERMITDESK_CREDENTIALS_PATH", str(tmp_path / "c.json"))

    assert AppSettings(_env_file=None).resolved_credentials_path() == tmp_path / "c.json"


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# comment\nPERMITDESK_LOG_LEVEL=DEBUG\n", encoding="utf-8")

    written = write_user_env_vars({"PERMITDESK_API_URL": "https://x.example"}, env_path=env_path)

    assert written == env_path
    assert _parse_env_lines(env_path.read_text(encoding="utf-8")) == {
        "PERMITDESK_API_URL": "https://x.example",
        "PERMITDESK_LOG_LEVEL": "DEBUG",
    }


def test_parse_env_lines_strips_quotes():
    assert _parse_env_lines('A="1"\nB=\'two\'\nbroken\n') == {"A": "1", "B": "two"}


def test_env_file_is_read(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("PERMITDESK_API_URL", raising=False)
    monkeypatch.delenv("NEXT_PUBLIC_API_URL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("PERMITDESK_API_URL=https://from-file.example\nPERMITDESK_LOG_LEVEL=INFO\n", encoding="utf-8")

    settings = AppSettings(_env_file=env_file)

    assert settings.api_url == "https://from-file.example"
    assert settings.log_level == "INFO"
