import uvicorn

from app.core.config import settings
from scripts import run_server


def test_run_server_uses_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    run_server.main()

    assert calls == [
        (
            "app.main:app",
            {"host": settings.HOST, "port": settings.PORT, "log_level": settings.LOG_LEVEL.lower()},
        )
    ]
