import pytest

from task_api import main as main_module
from task_api.config import ConfigError, load_settings
from task_api.database import DatabaseInitError, init_db
from task_api.interpreters.keyword import KeywordInterpreter
from task_api.interpreters.remote import RemoteModelInterpreter


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    for name in ("DATABASE_URL", "ALLOWED_ORIGINS", "LOG_LEVEL", "PORT", "QUERY_MODEL_URL", "ENV_FILE"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # leave pytest's log capture handlers alone
    monkeypatch.setattr(main_module, "configure_logging", lambda *args, **kwargs: None)


def test_missing_database_url(monkeypatch):
    with pytest.raises(ConfigError):
        load_settings()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a,http://b")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.database_url == "sqlite://"
    assert settings.allowed_origins == ["http://a", "http://b"]
    assert settings.log_level == "DEBUG"
    assert settings.port == 8080
    assert settings.query_model_url is None


def test_settings_from_dotenv(tmp_path):
    (tmp_path / ".env").write_text("DATABASE_URL=sqlite:///from-dotenv.db\n")
    assert load_settings().database_url == "sqlite:///from-dotenv.db"


def test_unreachable_database(tmp_path):
    with pytest.raises(DatabaseInitError):
        init_db(f"sqlite:///{tmp_path}/missing-dir/tasks.db")


def test_init_db_creates_schema(tmp_path):
    from sqlalchemy import inspect

    engine = init_db(f"sqlite:///{tmp_path}/tasks.db")
    columns = {c["name"] for c in inspect(engine).get_columns("tasks")}
    assert columns == {
        "id", "title", "description", "priority", "due_date",
        "tags", "is_completed", "created_at", "updated_at",
    }
    engine.dispose()


def test_main_exits_without_database_url():
    with pytest.raises(SystemExit) as exc:
        main_module.main()
    assert exc.value.code == 1


def test_main_exits_when_database_unreachable(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path}/missing-dir/tasks.db")
    with pytest.raises(SystemExit) as exc:
        main_module.main()
    assert exc.value.code == 1


def test_build_interpreter(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    assert isinstance(main_module.build_interpreter(load_settings()), KeywordInterpreter)

    monkeypatch.setenv("QUERY_MODEL_URL", "http://model/interpret")
    assert isinstance(main_module.build_interpreter(load_settings()), RemoteModelInterpreter)
