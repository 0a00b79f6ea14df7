from dataclasses import dataclass, replace
from datetime import datetime

from shortlink.constants import Limits
from shortlink.types import RecordMapping


@dataclass(frozen=True)
class UrlRecordModel:
    """Represent a shortened URL mapping.

    Attributes:
        short_code (str):
            The unique short identifier representing the shortened URL.
        long_url (str):
            The original long URL that the short code resolves to.
        created_at (datetime):
            Moment the mapping was created. Never changes afterwards.
        access_count (int):
            Number of recorded accesses. Starts at 0 and only ever grows.

    Example:
        >>> from datetime import datetime, UTC
        >>> record = UrlRecordModel(
        ...     short_code="aZ3kP9q",
        ...     long_url="https://example.com/article/123",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> record.access_count
        0
        >>> record.with_access_count(5).access_count
        5
    """

    short_code: str
    long_url: str
    created_at: datetime
    access_count: int = 0

    def __post_init__(self):
        if not self.long_url:
            raise ValueError('Long URL must be a non-empty string.')
        if len(self.long_url) > Limits.MAX_LONG_URL_LENGTH:
            raise ValueError(f'Long URL exceeds {Limits.MAX_LONG_URL_LENGTH} characters (given length: {len(self.long_url)}).')
        if self.access_count < 0:
            raise ValueError(f'Access count must be a non-negative integer (given value: {self.access_count}).')

    def with_access_count(self, access_count: int) -> 'UrlRecordModel':
        """Return a copy of this record with a different access counter."""
        return replace(self, access_count=access_count)

    def to_dict(self) -> RecordMapping:
        """Flatten the record into string fields (short code excluded, it is the key)."""
        return {
            'long_url': self.long_url,
            'created_at': self.created_at.isoformat(),
            'access_count': str(self.access_count),
        }

    @classmethod
    def from_dict(cls, short_code: str, data: RecordMapping) -> 'UrlRecordModel':
        """Rebuild a record from the flat mapping produced by to_dict()."""
        return cls(
            short_code=short_code,
            long_url=data['long_url'],
            created_at=datetime.fromisoformat(data['created_at']),
            access_count=int(data.get('access_count', 0)),
        )
