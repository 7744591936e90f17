from sqlalchemy import func, select

from asset_tracker import db
from asset_tracker.logger import get_logger
from asset_tracker.models import Employee
from asset_tracker.services import get_asset_registry, get_employee_registry

logger = get_logger('seed')

SAMPLE_EMPLOYEES = [
    ('John Smith', 'john@company.com'),
    ('Sarah Johnson', 'sarah@company.com'),
    ('Mike Chen', 'mike@company.com'),
    ('Aarav Sharma', 'aarav.sharma@company.com'),
    ('Sita Thapa', 'sita.thapa@company.com'),
    ('Bikash Gurung', 'bikash.gurung@company.com'),
]

SAMPLE_ASSETS = [
    ('MacBook Pro 16"', 'Laptop'),
    ('iPhone 15 Pro', 'Phone'),
    ('Dell Monitor', 'Monitor'),
]


def seed_db():
    """Insert sample employees and assets into an empty database.

    Must run inside an application context. Assets go through the registry
    so they receive allocated serials like any other registration.
    """
    # Check if the employee table is already seeded
    if db.session.scalar(select(func.count(Employee.id))) > 0:
        return

    employees = get_employee_registry()
    for full_name, email in SAMPLE_EMPLOYEES:
        employees.register(full_name, email)

    assets = get_asset_registry()
    for name, asset_type in SAMPLE_ASSETS:
        assets.register(name, asset_type)

    logger.info('Seeded %d employees and %d assets', len(SAMPLE_EMPLOYEES), len(SAMPLE_ASSETS))
