from datetime import datetime, timedelta

import pytest

from asset_tracker import create_app, db
from asset_tracker.config import TestConfig, sqlite_engine_options
from asset_tracker.services import AssetRegistry, AssignmentLedger, EmployeeRegistry


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start=datetime(2025, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def app(tmp_path):
    # A file database, so worker threads each get their own connection
    uri = f"sqlite:///{tmp_path / 'assets.db'}"

    class Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = uri
        SQLALCHEMY_ENGINE_OPTIONS = sqlite_engine_options(uri)

    app = create_app(Config)
    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    with app.app_context():
        yield db.session


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def ledger(session, clock):
    return AssignmentLedger(session, clock=clock)


@pytest.fixture
def assets(session, clock):
    return AssetRegistry(session, clock=clock)


@pytest.fixture
def employees(session, clock):
    return EmployeeRegistry(session, clock=clock)


@pytest.fixture
def laptop(assets):
    return assets.register('MacBook Pro 16"', 'Laptop')


@pytest.fixture
def alice(employees):
    return employees.register('Alice Martin', 'alice@company.com', position='Engineer')


@pytest.fixture
def bob(employees):
    return employees.register('Bob Stone', 'bob@company.com')


@pytest.fixture
def add_asset(client):
    def _add_asset(name='MacBook Pro 16"', asset_type='Laptop'):
        response = client.post('/api/assets', json={'name': name, 'asset_type': asset_type})
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _add_asset


@pytest.fixture
def add_employee(client):
    def _add_employee(full_name='John Smith', email='john@company.com'):
        response = client.post('/api/employees', json={'full_name': full_name, 'email': email})
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _add_employee
