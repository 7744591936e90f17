# asset_tracker/routes/__init__.py
from flask import Blueprint, request

from asset_tracker.errors import ValidationError

# Create blueprints
assets_bp = Blueprint('assets', __name__, url_prefix='/api/assets')
employees_bp = Blueprint('employees', __name__, url_prefix='/api/employees')
assignments_bp = Blueprint('assignments', __name__, url_prefix='/api/assignments')


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def required_id(data, field):
    value = data.get(field)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f'{field} must be an integer')
    return value


# Import views after blueprints are created
from . import assets, employees, assignments  # noqa: E402,F401
