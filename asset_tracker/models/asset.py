# asset_tracker/models/asset.py
from asset_tracker import db
from asset_tracker.timeutils import utcnow, isoformat


class Asset(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    asset_type = db.Column(db.String(50), nullable=False)
    # Nullable only until the serial allocator has produced one
    serial_number = db.Column(db.String(100), unique=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    # History goes with the asset when it is deleted
    assignments = db.relationship(
        'Assignment',
        backref='asset',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='Assignment.assigned_at.desc()',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'asset_type': self.asset_type,
            'serial_number': self.serial_number,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Asset {self.serial_number}: {self.name} ({self.asset_type})>'
