# asset_tracker/routes/assets.py
from flask import jsonify

from asset_tracker.routes import assets_bp as bp, json_body
from asset_tracker.services import get_asset_registry, get_ledger


@bp.route('', methods=['GET'])
def list_assets():
    assets = get_asset_registry().list_assets()
    return jsonify([asset.to_dict() for asset in assets])


@bp.route('', methods=['POST'])
def add_asset():
    data = json_body()
    asset = get_asset_registry().register(data.get('name'), data.get('asset_type'))
    return jsonify(asset.to_dict()), 201


@bp.route('/available')
def available_assets():
    assets = get_asset_registry().available_assets()
    return jsonify([asset.to_dict() for asset in assets])


@bp.route('/<int:asset_id>', methods=['GET'])
def view_asset(asset_id):
    return jsonify(get_asset_registry().get(asset_id).to_dict())


@bp.route('/<int:asset_id>', methods=['PATCH'])
def update_asset(asset_id):
    data = json_body()
    asset = get_asset_registry().update(
        asset_id,
        name=data.get('name'),
        asset_type=data.get('asset_type'),
    )
    return jsonify(asset.to_dict())


@bp.route('/<int:asset_id>', methods=['DELETE'])
def delete_asset(asset_id):
    get_asset_registry().delete(asset_id)
    return '', 204


@bp.route('/<int:asset_id>/history')
def asset_history(asset_id):
    assignments = get_ledger().history(asset_id)
    return jsonify([
        dict(assignment.to_dict(),
             employee_name=assignment.employee.full_name,
             employee_email=assignment.employee.email)
        for assignment in assignments
    ])
