# asset_tracker/services/ledger.py
"""Assignment ledger: who holds which asset, and since when.

An assignment is active until its ``returned_at`` is set, and an asset may
have at most one active assignment. That rule lives in the database as a
partial unique index, so the ledger attempts the write and translates the
constraint violation instead of relying on a check-then-insert. Every
method works on the session it was given and leaves it committed or rolled
back before returning or raising.
"""
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from asset_tracker.errors import (
    AlreadyAssigned,
    AssetInUse,
    NotFound,
    NotFoundOrAlreadyReturned,
    ReturnBeforeAssigned,
)
from asset_tracker.logger import get_logger
from asset_tracker.models import Asset, Assignment, Employee
from asset_tracker.timeutils import utcnow

logger = get_logger('ledger')


class AssignmentLedger:
    def __init__(self, session, clock=utcnow):
        self.session = session
        self.clock = clock

    def _require(self, model, entity_id):
        instance = self.session.get(model, entity_id)
        if instance is None:
            raise NotFound(model.__tablename__, entity_id)
        return instance

    def is_active(self, asset_id):
        return self.session.scalar(
            select(Assignment.id)
            .where(Assignment.asset_id == asset_id, Assignment.returned_at.is_(None))
            .limit(1)
        ) is not None

    def assign(self, asset_id, employee_id):
        """Lend an asset to an employee.

        Raises NotFound for an unknown asset or employee and AlreadyAssigned
        when the asset has an active holder, including when a concurrent
        assign wins the race between our read and our insert.
        """
        self._require(Asset, asset_id)
        self._require(Employee, employee_id)
        if self.is_active(asset_id):
            logger.warning('Asset %s is already assigned', asset_id)
            raise AlreadyAssigned(asset_id)

        assignment = Assignment(
            asset_id=asset_id,
            employee_id=employee_id,
            assigned_at=self.clock(),
        )
        self.session.add(assignment)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            # Either another assign got there first or a referenced row vanished
            self._require(Asset, asset_id)
            self._require(Employee, employee_id)
            logger.warning('Lost assignment race for asset %s', asset_id)
            raise AlreadyAssigned(asset_id)

        logger.info('Assigned asset %s to employee %s (assignment %s)',
                    asset_id, employee_id, assignment.id)
        return assignment

    def return_assignment(self, assignment_id):
        """Close an active assignment.

        The update only matches a row that is still active, so of two
        concurrent returns exactly one succeeds.
        """
        stmt = (
            update(Assignment)
            .where(Assignment.id == assignment_id, Assignment.returned_at.is_(None))
            .values(returned_at=self.clock())
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(stmt)
        except IntegrityError:
            self.session.rollback()
            logger.warning('Rejected return of assignment %s dated before it was assigned', assignment_id)
            raise ReturnBeforeAssigned(assignment_id)

        if result.rowcount == 0:
            self.session.rollback()
            logger.warning('Assignment %s not found or already returned', assignment_id)
            raise NotFoundOrAlreadyReturned(assignment_id)

        self.session.commit()
        assignment = self.session.get(Assignment, assignment_id)
        logger.info('Returned asset %s (assignment %s)', assignment.asset_id, assignment_id)
        return assignment

    def active_assignments(self):
        """Active assignments with their asset and employee loaded, newest first."""
        stmt = (
            select(Assignment)
            .where(Assignment.returned_at.is_(None))
            .options(joinedload(Assignment.asset), joinedload(Assignment.employee))
            .order_by(Assignment.assigned_at.desc(), Assignment.id.desc())
        )
        return list(self.session.scalars(stmt))

    def history(self, asset_id):
        self._require(Asset, asset_id)
        stmt = (
            select(Assignment)
            .where(Assignment.asset_id == asset_id)
            .options(joinedload(Assignment.employee))
            .order_by(Assignment.assigned_at.desc(), Assignment.id.desc())
        )
        return list(self.session.scalars(stmt))

    def employee_history(self, employee_id):
        self._require(Employee, employee_id)
        stmt = (
            select(Assignment)
            .where(Assignment.employee_id == employee_id)
            .options(joinedload(Assignment.asset))
            .order_by(Assignment.assigned_at.desc(), Assignment.id.desc())
        )
        return list(self.session.scalars(stmt))

    def delete_asset(self, asset_id):
        """Delete an asset and its assignment history.

        Refused with AssetInUse while the asset has an active holder.
        """
        asset = self.session.scalars(
            select(Asset).where(Asset.id == asset_id).with_for_update()
        ).first()
        if asset is None:
            self.session.rollback()
            raise NotFound('asset', asset_id)

        # Writing first takes the store's write lock, so no assign can slip
        # in between the check below and the delete.
        removed = self.session.execute(
            delete(Assignment)
            .where(Assignment.asset_id == asset_id, Assignment.returned_at.is_not(None))
            .execution_options(synchronize_session='fetch')
        ).rowcount
        if self.is_active(asset_id):
            self.session.rollback()
            logger.warning('Refused to delete asset %s while it is assigned', asset_id)
            raise AssetInUse(asset_id)

        self.session.delete(asset)
        self.session.commit()
        logger.info('Deleted asset %s and %d history rows', asset_id, removed)
