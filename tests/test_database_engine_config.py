def test_get_engine_kwargs_sqlite_has_check_same_thread(monkeypatch):
    # Import lazily so monkeypatch can affect env usage deterministically.
    from tasklens.database import database as db

    kwargs = db.get_engine_kwargs("sqlite:///./tasklens.db")
    assert "connect_args" in kwargs
    assert kwargs["connect_args"]["check_same_thread"] is False
    # SQLite should not require pool sizing knobs.
    assert "pool_size" not in kwargs
    assert "max_overflow" not in kwargs
    assert kwargs["pool_pre_ping"] is True


def test_get_engine_kwargs_postgres_has_conservative_pooling(monkeypatch):
    from tasklens.database import database as db

    monkeypatch.setenv("DB_POOL_SIZE", "5")
    monkeypatch.setenv("DB_MAX_OVERFLOW", "5")
    monkeypatch.setenv("DB_POOL_TIMEOUT_SEC", "30")

    kwargs = db.get_engine_kwargs("postgresql+psycopg://u:p@localhost:5432/db")
    assert "connect_args" not in kwargs
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 5
    assert kwargs["max_overflow"] == 5
    assert kwargs["pool_timeout"] == 30


def test_debug_env_enables_echo(monkeypatch):
    from tasklens.database import database as db

    monkeypatch.setenv("DEBUG", "true")
    assert db.get_engine_kwargs("sqlite:///./tasklens.db")["echo"] is True


def test_is_sqlite_url():
    from tasklens.database import database as db

    assert db._is_sqlite_url("sqlite:///./tasklens.db") is True
    assert db._is_sqlite_url("postgresql+psycopg://u:p@localhost/db") is False


def test_sqlite_pragmas_follow_the_connecting_engine(monkeypatch):
    from sqlalchemy import create_engine, text
    from tasklens.database import database as db

    # The configured URL must not decide whether a SQLite engine gets foreign keys
    monkeypatch.setattr(db, "DATABASE_URL", "postgresql+psycopg://u:p@localhost/db")
    engine = create_engine("sqlite:///:memory:")
    try:
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    finally:
        engine.dispose()


def test_sqlite_pragmas_skip_other_drivers():
    from unittest.mock import MagicMock
    from tasklens.database import database as db

    dbapi_conn = MagicMock()
    db.set_sqlite_pragmas(dbapi_conn, None)
    dbapi_conn.cursor.assert_not_called()
