from fastapi.testclient import TestClient

from api.main import create_app
from fca_fines.config import AppConfig, DatabaseConfig, Settings


def _make_app(debug: bool):
    settings = Settings(
        app=AppConfig(debug=debug),
        db=DatabaseConfig(database_url="postgresql://unused@localhost/fca_fines_test"),
    )
    app = create_app(settings)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


def test_health_and_root(client) -> None:
    assert client.get("/health").json() == {"status": "healthy", "service": "fca-fines-api"}

    root = client.get("/").json()
    assert root["status"] == "operational"
    assert root["endpoints"]["homepage_stats"] == "/api/homepage/stats"


def test_unhandled_error_hides_detail_outside_debug() -> None:
    client = TestClient(_make_app(debug=False), raise_server_exceptions=False)

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "detail": "An unexpected error occurred",
    }


def test_unhandled_error_shows_detail_in_debug() -> None:
    client = TestClient(_make_app(debug=True), raise_server_exceptions=False)

    assert client.get("/boom").json()["detail"] == "kaboom"
