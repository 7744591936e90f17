# asset_tracker/errors.py
"""Failure kinds raised by the services.

Each kind is recoverable at the caller boundary; the HTTP layer maps
``status_code`` straight onto the response.
"""


class AssetTrackerError(Exception):
    kind = 'AssetTrackerError'
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.kind, 'message': self.message}


class ValidationError(AssetTrackerError, ValueError):
    kind = 'ValidationError'
    status_code = 400


class NotFound(AssetTrackerError):
    kind = 'NotFound'
    status_code = 404

    def __init__(self, entity, entity_id):
        super().__init__(f'{entity.capitalize()} {entity_id} not found')
        self.entity = entity
        self.entity_id = entity_id


class AlreadyAssigned(AssetTrackerError):
    kind = 'AlreadyAssigned'
    status_code = 409

    def __init__(self, asset_id):
        super().__init__(f'Asset {asset_id} is already assigned')
        self.asset_id = asset_id


class NotFoundOrAlreadyReturned(AssetTrackerError):
    kind = 'NotFoundOrAlreadyReturned'
    status_code = 409

    def __init__(self, assignment_id):
        super().__init__(f'Assignment {assignment_id} not found or already returned')
        self.assignment_id = assignment_id


class ReturnBeforeAssigned(AssetTrackerError):
    kind = 'ReturnBeforeAssigned'
    status_code = 409

    def __init__(self, assignment_id):
        super().__init__(f'Assignment {assignment_id} cannot be returned before it was assigned')
        self.assignment_id = assignment_id


class AssetInUse(AssetTrackerError):
    kind = 'AssetInUse'
    status_code = 409

    def __init__(self, asset_id):
        super().__init__(f'Asset {asset_id} has an active assignment')
        self.asset_id = asset_id


class DuplicateEmail(AssetTrackerError):
    kind = 'DuplicateEmail'
    status_code = 409

    def __init__(self, email):
        super().__init__(f'An employee with email {email} already exists')
        self.email = email


class SerialAllocationFailed(AssetTrackerError):
    kind = 'SerialAllocationFailed'
    status_code = 503

    def __init__(self, asset_type, attempts):
        super().__init__(f'Could not allocate a serial number for {asset_type!r} after {attempts} attempts')
        self.asset_type = asset_type
        self.attempts = attempts
