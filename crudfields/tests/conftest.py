# tests/conftest.py
import pytest
from flask import Flask
from flask_babel import Babel
from werkzeug.test import EnvironBuilder

from crudfields import registry


@pytest.fixture
def app(tmp_path):
    app = Flask(__name__)
    app.config.update({
        "TESTING": True,
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "MEDIA_URL": "/media/",
        "MAX_FILE_SIZE_MB": 1,
    })
    Babel(app)

    with app.app_context():
        yield app


@pytest.fixture
def make_request():
    """POST request factory; tuples in data become multipart file uploads."""
    def _make(data=None):
        builder = EnvironBuilder(method='POST', data=data or {})
        return builder.get_request()
    return _make


@pytest.fixture
def isolated_registry(monkeypatch):
    """Registrations made by a test do not leak into other tests"""
    monkeypatch.setattr(registry, '_custom_fields', dict(registry._custom_fields))
    return registry
