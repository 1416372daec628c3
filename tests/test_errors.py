# tests/test_errors.py
from fastapi.testclient import TestClient

from app.errors import DEFAULT_ERROR_MESSAGE, BadRequest, NotFound, ValidationError, error_envelope
from app.main import create_app


def _app_with_failing_routes():
    app = create_app()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("disk on fire")

    @app.get("/silent")
    async def silent():
        raise RuntimeError()

    return app


def test_unhandled_error_is_500_envelope():
    client = TestClient(_app_with_failing_routes(), raise_server_exceptions=False)
    r = client.get("/boom")
    assert r.status_code == 500
    assert r.json() == {"error": {"status": 500, "message": "disk on fire"}}


def test_unhandled_error_without_message_uses_default():
    client = TestClient(_app_with_failing_routes(), raise_server_exceptions=False)
    r = client.get("/silent")
    assert r.status_code == 500
    assert r.json()["error"]["message"] == DEFAULT_ERROR_MESSAGE


def test_error_classes_carry_status():
    assert ValidationError("bad").status_code == 400
    assert BadRequest().status_code == 400
    assert NotFound().message == "Product not found"
    assert isinstance(ValidationError("x"), BadRequest)


def test_error_envelope_shape():
    assert error_envelope(404, "gone") == {"error": {"status": 404, "message": "gone"}}
    assert error_envelope(500, "") == {"error": {"status": 500, "message": DEFAULT_ERROR_MESSAGE}}
