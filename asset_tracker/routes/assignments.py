# asset_tracker/routes/assignments.py
from flask import jsonify

from asset_tracker.routes import assignments_bp as bp, json_body, required_id
from asset_tracker.services import get_ledger


@bp.route('/active')
def active_assignments():
    assignments = get_ledger().active_assignments()
    return jsonify([assignment.to_dict(detailed=True) for assignment in assignments])


@bp.route('', methods=['POST'])
def add_assignment():
    data = json_body()
    assignment = get_ledger().assign(
        required_id(data, 'asset_id'),
        required_id(data, 'employee_id'),
    )
    return jsonify(assignment.to_dict(detailed=True)), 201


@bp.route('/<int:assignment_id>/return', methods=['POST'])
def return_asset(assignment_id):
    assignment = get_ledger().return_assignment(assignment_id)
    return jsonify(assignment.to_dict(detailed=True))
