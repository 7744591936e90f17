# asset_tracker/routes/employees.py
from flask import jsonify

from asset_tracker.routes import employees_bp as bp, json_body
from asset_tracker.services import get_employee_registry, get_ledger


@bp.route('', methods=['GET'])
def list_employees():
    employees = get_employee_registry().list_employees()
    return jsonify([employee.to_dict() for employee in employees])


@bp.route('', methods=['POST'])
def add_employee():
    data = json_body()
    employee = get_employee_registry().register(
        data.get('full_name'),
        data.get('email'),
        position=data.get('position'),
    )
    return jsonify(employee.to_dict()), 201


@bp.route('/<int:employee_id>', methods=['GET'])
def view_employee(employee_id):
    return jsonify(get_employee_registry().get(employee_id).to_dict())


@bp.route('/<int:employee_id>', methods=['PATCH'])
def update_employee(employee_id):
    data = json_body()
    employee = get_employee_registry().update(
        employee_id,
        full_name=data.get('full_name'),
        position=data.get('position'),
    )
    return jsonify(employee.to_dict())


@bp.route('/<int:employee_id>/history')
def employee_history(employee_id):
    assignments = get_ledger().employee_history(employee_id)
    return jsonify([
        dict(assignment.to_dict(),
             asset_name=assignment.asset.name,
             serial_number=assignment.asset.serial_number)
        for assignment in assignments
    ])
