# asset_tracker/models/__init__.py
from sqlalchemy.orm import configure_mappers

from asset_tracker import db

# Import models after db
from .asset import Asset
from .employee import Employee, DEFAULT_POSITION
from .assignment import Assignment

# Backrefs (Assignment.asset, Assignment.employee) exist only once mappers are configured
configure_mappers()

__all__ = ['db', 'Asset', 'Employee', 'Assignment', 'DEFAULT_POSITION']
