# asset_tracker/services/registry.py
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError

from asset_tracker.errors import DuplicateEmail, NotFound, SerialAllocationFailed, ValidationError
from asset_tracker.logger import get_logger
from asset_tracker.models import DEFAULT_POSITION, Asset, Assignment, Employee
from asset_tracker.services.ledger import AssignmentLedger
from asset_tracker.services.serials import DEFAULT_MAX_ATTEMPTS, SerialAllocator
from asset_tracker.timeutils import utcnow

logger = get_logger('registry')


def _required_text(value, field):
    if value is None or not str(value).strip():
        raise ValidationError(f'{field} is required')
    return str(value).strip()


def _optional_text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class AssetRegistry:
    """Registers, edits and removes assets.

    Registration allocates the serial and inserts the row as one retry
    unit: if a concurrent registration commits the same serial first, the
    insert fails on the UNIQUE constraint and a fresh serial is allocated.
    """

    def __init__(self, session, clock=utcnow, max_attempts=DEFAULT_MAX_ATTEMPTS):
        self.session = session
        self.clock = clock
        self.max_attempts = max_attempts
        self.allocator = SerialAllocator(session, clock=clock, max_attempts=max_attempts)

    def get(self, asset_id):
        asset = self.session.get(Asset, asset_id)
        if asset is None:
            raise NotFound('asset', asset_id)
        return asset

    def list_assets(self):
        return list(self.session.scalars(select(Asset).order_by(Asset.name, Asset.id)))

    def available_assets(self):
        """Assets nobody currently holds."""
        held = exists().where(Assignment.asset_id == Asset.id, Assignment.returned_at.is_(None))
        return list(self.session.scalars(select(Asset).where(~held).order_by(Asset.name, Asset.id)))

    def register(self, name, asset_type):
        name = _required_text(name, 'name')
        asset_type = _required_text(asset_type, 'asset_type')

        for attempt in range(1, self.max_attempts + 1):
            serial = self.allocator.next_serial(asset_type)
            asset = Asset(name=name, asset_type=asset_type, serial_number=serial, created_at=self.clock())
            self.session.add(asset)
            try:
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                logger.warning('Serial %s was registered concurrently (attempt %d/%d)',
                               serial, attempt, self.max_attempts)
                continue
            logger.info('Registered asset %s as %s', asset.id, serial)
            return asset

        logger.error('Could not register %r asset after %d attempts', asset_type, self.max_attempts)
        raise SerialAllocationFailed(asset_type, self.max_attempts)

    def update(self, asset_id, name=None, asset_type=None):
        """Edit name and/or type. The serial is kept even when the type changes."""
        asset = self.get(asset_id)
        if name is not None:
            asset.name = _required_text(name, 'name')
        if asset_type is not None:
            asset.asset_type = _required_text(asset_type, 'asset_type')
        self.session.commit()
        return asset

    def delete(self, asset_id):
        AssignmentLedger(self.session, clock=self.clock).delete_asset(asset_id)


class EmployeeRegistry:
    def __init__(self, session, clock=utcnow):
        self.session = session
        self.clock = clock

    def get(self, employee_id):
        employee = self.session.get(Employee, employee_id)
        if employee is None:
            raise NotFound('employee', employee_id)
        return employee

    def list_employees(self):
        return list(self.session.scalars(select(Employee).order_by(Employee.full_name, Employee.id)))

    def find_by_email(self, email):
        return self.session.scalars(select(Employee).where(Employee.email == email)).first()

    def register(self, full_name, email, position=None):
        full_name = _required_text(full_name, 'full_name')
        email = _required_text(email, 'email').lower()
        if '@' not in email:
            raise ValidationError(f'Invalid email address: {email}')
        if self.find_by_email(email) is not None:
            raise DuplicateEmail(email)

        employee = Employee(
            full_name=full_name,
            email=email,
            position=_optional_text(position) or DEFAULT_POSITION,
            created_at=self.clock(),
        )
        self.session.add(employee)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEmail(email)
        logger.info('Registered employee %s <%s>', employee.id, email)
        return employee

    def update(self, employee_id, full_name=None, position=None):
        employee = self.get(employee_id)
        if full_name is not None:
            employee.full_name = _required_text(full_name, 'full_name')
        if position is not None:
            employee.position = _optional_text(position) or DEFAULT_POSITION
        self.session.commit()
        return employee
