import pytest
from fastapi.testclient import TestClient

from backend import create_app
from config import Config


@pytest.fixture
def static_dir(tmp_path):
    root = tmp_path / "static"
    (root / "icons").mkdir(parents=True)
    (root / "index.html").write_text("<html><body>editor</body></html>")
    (root / "script.js").write_text("console.log('hi');")
    (root / "icons" / "curve.svg").write_text("<svg></svg>")
    return root


@pytest.fixture
def settings(static_dir):
    cfg = Config()
    cfg.STATIC_DIR = static_dir
    cfg.CORS_ORIGINS = ["http://localhost:3194"]
    return cfg


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
