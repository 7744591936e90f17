# asset_tracker/services/serials.py
"""Serial number allocation for newly registered assets.

Serials look like ``LA-2025-001``: a two letter prefix taken from the asset
type, the current year, and a sequence number that is unique and increasing
within that (prefix, year) scope. The sequence is zero padded to three digits
and simply grows past 999 (``LA-2025-1000``), so suffixes are always compared
as numbers.

The allocator only proposes a serial. The UNIQUE constraint on
``asset.serial_number`` decides who wins when two registrations race; see
``AssetRegistry.register`` for the insert side of the retry.
"""
import re

from sqlalchemy import select

from asset_tracker.errors import SerialAllocationFailed, ValidationError
from asset_tracker.logger import get_logger
from asset_tracker.models import Asset
from asset_tracker.timeutils import utcnow

logger = get_logger('serials')

PREFIX_LENGTH = 2
PREFIX_FILLER = 'X'
SEQUENCE_WIDTH = 3
DEFAULT_MAX_ATTEMPTS = 20

_NON_LETTERS = re.compile(r'[^A-Za-z]')
_DIGITS = re.compile(r'[0-9]+')


def serial_prefix(asset_type):
    """Two upper-case letters derived from a free-text asset type.

    Non-letters are dropped and short results are padded with ``X``:
    ``"Laptop"`` gives ``LA``, ``"A"`` gives ``AX``, ``"123"`` gives ``XX``.
    """
    if asset_type is None or not str(asset_type).strip():
        raise ValidationError('Asset type is required')
    letters = _NON_LETTERS.sub('', str(asset_type))
    return letters[:PREFIX_LENGTH].upper().ljust(PREFIX_LENGTH, PREFIX_FILLER)


def serial_scope(prefix, year):
    return f'{prefix}-{year}-'


def format_serial(prefix, year, number):
    return f'{serial_scope(prefix, year)}{number:0{SEQUENCE_WIDTH}d}'


def parse_sequence(serial, scope):
    """Sequence number of ``serial`` inside ``scope``, or None if it is not one of ours."""
    if not serial or not serial.startswith(scope):
        return None
    suffix = serial[len(scope):]
    if not _DIGITS.fullmatch(suffix):
        return None
    return int(suffix)


class SerialAllocator:
    def __init__(self, session, clock=utcnow, max_attempts=DEFAULT_MAX_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError('max_attempts must be at least 1')
        self.session = session
        self.clock = clock
        self.max_attempts = max_attempts

    def highest_sequence(self, scope):
        """Highest sequence number already used in ``scope``, 0 when the scope is empty."""
        serials = self.session.scalars(
            select(Asset.serial_number).where(Asset.serial_number.like(f'{scope}%'))
        ).all()
        numbers = [n for n in (parse_sequence(s, scope) for s in serials) if n is not None]
        return max(numbers, default=0)

    def is_taken(self, serial):
        return self.session.scalar(
            select(Asset.id).where(Asset.serial_number == serial).limit(1)
        ) is not None

    def next_serial(self, asset_type):
        prefix = serial_prefix(asset_type)
        year = self.clock().year
        scope = serial_scope(prefix, year)
        candidate = self.highest_sequence(scope) + 1

        for attempt in range(1, self.max_attempts + 1):
            serial = format_serial(prefix, year, candidate)
            if not self.is_taken(serial):
                logger.debug('Proposed serial %s for type %r', serial, asset_type)
                return serial
            logger.warning('Serial %s already taken (attempt %d/%d)', serial, attempt, self.max_attempts)
            candidate += 1

        logger.error('Serial allocation for %r gave up after %d attempts', asset_type, self.max_attempts)
        raise SerialAllocationFailed(asset_type, self.max_attempts)
