# asset_tracker/models/assignment.py
from sqlalchemy import text

from asset_tracker import db
from asset_tracker.timeutils import utcnow, isoformat

ACTIVE_CONDITION = 'returned_at IS NULL'


class Assignment(db.Model):
    """One lending of an asset to an employee.

    Active while ``returned_at`` is null; setting it is the only mutation and
    is final. The partial unique index allows a single active row per asset,
    which is what makes concurrent assignment safe.
    """
    __table_args__ = (
        db.CheckConstraint(
            'returned_at IS NULL OR returned_at >= assigned_at',
            name='ck_assignment_returned_after_assigned',
        ),
        db.Index(
            'uq_assignment_one_active_per_asset',
            'asset_id',
            unique=True,
            sqlite_where=text(ACTIVE_CONDITION),
            postgresql_where=text(ACTIVE_CONDITION),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('asset.id'), nullable=False, index=True)
    employee_id = db.Column(db.Integer, db.ForeignKey('employee.id'), nullable=False, index=True)
    assigned_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    returned_at = db.Column(db.DateTime)

    @property
    def is_active(self):
        return self.returned_at is None

    def to_dict(self, detailed=False):
        data = {
            'id': self.id,
            'asset_id': self.asset_id,
            'employee_id': self.employee_id,
            'assigned_at': isoformat(self.assigned_at),
            'returned_at': isoformat(self.returned_at),
            'is_active': self.is_active,
        }
        if detailed:
            data.update({
                'asset_name': self.asset.name,
                'asset_type': self.asset.asset_type,
                'serial_number': self.asset.serial_number,
                'employee_name': self.employee.full_name,
                'employee_email': self.employee.email,
            })
        return data

    def __repr__(self):
        state = 'active' if self.is_active else 'returned'
        return f'<Assignment {self.id}: asset {self.asset_id} -> employee {self.employee_id} ({state})>'
