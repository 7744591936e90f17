# asset_tracker/models/employee.py
from asset_tracker import db
from asset_tracker.timeutils import utcnow, isoformat

DEFAULT_POSITION = 'Staff'


class Employee(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    position = db.Column(db.String(100), default=DEFAULT_POSITION)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    assignments = db.relationship('Assignment', backref='employee', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'full_name': self.full_name,
            'email': self.email,
            'position': self.position,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Employee {self.email}>'
