import threading

import httpx
import pytest

from serve_static import make_server


@pytest.fixture
def static_server(static_dir):
    server = make_server(directory=static_dir, port=0, host="127.0.0.1")
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_serves_index_with_cors_headers(static_server) -> None:
    response = httpx.get(f"{static_server}/")
    assert response.status_code == 200
    assert "editor" in response.text
    assert response.headers["access-control-allow-origin"] == "*"


def test_serves_nested_file(static_server) -> None:
    response = httpx.get(f"{static_server}/icons/curve.svg")
    assert response.status_code == 200
    assert response.text == "<svg></svg>"


def test_missing_file_is_404(static_server) -> None:
    assert httpx.get(f"{static_server}/missing.js").status_code == 404


def test_requests_are_logged(static_server, caplog) -> None:
    caplog.set_level("INFO", logger="serve_static")
    httpx.get(f"{static_server}/script.js")
    assert any("GET /script.js" in r.getMessage() for r in caplog.records)
