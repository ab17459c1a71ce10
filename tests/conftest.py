import os
import sys
from datetime import datetime, timedelta
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from models.account import OneTimeCode

@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
    from app import create_app
    from app.config import TestingConfig
    app = create_app(TestingConfig)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app

@pytest.fixture(scope='function')
def app(app_instance, tmp_path):
    from extensions import limiter
    from app.services.storage import LocalUploader
    limiter.reset()
    app_instance.uploader = LocalUploader(str(tmp_path / 'uploads'), '/uploads')
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()

@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def seed_otp(app):
    """Store a code for a phone, ``age_seconds`` old."""
    def _seed(phone, code, age_seconds=10):
        db.session.add(OneTimeCode(
            phone_number=phone,
            code=code,
            created_at=datetime.utcnow() - timedelta(seconds=age_seconds),
        ))
        db.session.commit()
    return _seed


@pytest.fixture
def login_stub(client):
    """Create (or reuse) an account through the test-support blueprint."""
    def _login(phone='9000000001', role='Wholesaler', **extra):
        resp = client.post('/__auth/login_stub', json={'phoneNumber': phone, 'role': role, **extra})
        return resp.get_json()['data']
    return _login


@pytest.fixture
def auth_headers(login_stub):
    def _headers(phone='9000000001', role='Wholesaler'):
        return {'Authorization': f"Bearer {login_stub(phone, role)['access']}"}
    return _headers
