# asset_tracker/services/__init__.py
from flask import current_app

from asset_tracker import db
from .ledger import AssignmentLedger
from .registry import AssetRegistry, EmployeeRegistry
from .serials import SerialAllocator

__all__ = ['AssignmentLedger', 'AssetRegistry', 'EmployeeRegistry', 'SerialAllocator',
           'get_ledger', 'get_asset_registry', 'get_employee_registry']


# Each request gets services bound to its own app-context session
def get_ledger():
    return AssignmentLedger(db.session)


def get_asset_registry():
    return AssetRegistry(db.session, max_attempts=current_app.config['SERIAL_MAX_ATTEMPTS'])


def get_employee_registry():
    return EmployeeRegistry(db.session)
