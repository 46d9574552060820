from fastapi.testclient import TestClient

from services.users.config import UsersConfig
from services.users.main import build_app


def test_build_app_serves_ping_and_user_routes():
    config = UsersConfig(
        table_name="users",
        name_index="nameIndex",
        region="us-east-1",
        access_key="testing",
        secret_key="testing",
    )

    app = build_app(config)
    client = TestClient(app)

    assert client.get("/ping").json() == {"message": "pong"}
    paths = {route.path for route in app.routes}
    assert {"/v1/users", "/v1/users/{user_id}"} <= paths


def test_run_server_serves_built_app(monkeypatch):
    from services.users import run_server

    config = UsersConfig(
        table_name="users",
        name_index="nameIndex",
        region="us-east-1",
        access_key="testing",
        secret_key="testing",
        log_level="DEBUG",
        server_host="127.0.0.1",
        server_port=9001,
    )
    called = {}

    def fake_run(app, **kwargs):
        called["app"] = app
        called.update(kwargs)

    monkeypatch.setattr(run_server, "load_config", lambda: config)
    monkeypatch.setattr(run_server.uvicorn, "run", fake_run)

    run_server.main()

    assert called["host"] == "127.0.0.1"
    assert called["port"] == 9001
    assert called["log_level"] == "debug"
    assert "/v1/users" in {route.path for route in called["app"].routes}
