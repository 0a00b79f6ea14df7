"""In-memory Data Access Object (DAO) implementation for shortened URLs

Records live for the lifetime of the process. Suitable for local runs,
tests, and single-process deployments.

Responsibilities:
    - Keep the forward (short code) and reverse (long URL) indexes consistent;
    - Serialize every mutation through a single store lock so counter
      increments and long URL dedup are atomic;
    - Hand out immutable record snapshots to callers.

Example:
    >>> dao = UrlRecordMemoryDAO()
    >>> dao.put(record).exists(record.short_code)
    True
"""

import threading

from beartype import beartype

from shortlink.models import UrlRecordModel
from shortlink.dao.base import UrlRecordBaseDAO
from shortlink.dao.exceptions import ShortCodeTakenError


class UrlRecordMemoryDAO(UrlRecordBaseDAO):
    """Thread-safe, process-local DAO for UrlRecordModel instances

    Attributes:
        _records (dict[str, UrlRecordModel]):
            Forward index: short code -> record.
        _codes_by_url (dict[str, str]):
            Reverse index: long URL -> short code.
        _lock (threading.RLock):
            Guards both indexes.
    """

    def __init__(self):
        self._records: dict[str, UrlRecordModel] = {}
        self._codes_by_url: dict[str, str] = {}
        self._lock = threading.RLock()

    @beartype
    def put(self, record: UrlRecordModel, **kwargs) -> 'UrlRecordMemoryDAO':
        with self._lock:
            previous = self._records.get(record.short_code)
            # Overwriting a code with another URL drops the stale reverse entry
            if previous is not None and previous.long_url != record.long_url:
                if self._codes_by_url.get(previous.long_url) == record.short_code:
                    del self._codes_by_url[previous.long_url]
            self._records[record.short_code] = record
            self._codes_by_url[record.long_url] = record.short_code
        return self

    @beartype
    def put_if_absent(self, record: UrlRecordModel, **kwargs) -> UrlRecordModel:
        with self._lock:
            existing_code = self._codes_by_url.get(record.long_url)
            if existing_code is not None:
                return self._records[existing_code]
            if record.short_code in self._records:
                raise ShortCodeTakenError(f"Short code '{record.short_code}' is already taken.")
            self.put(record)
        return record

    @beartype
    def get(self, short_code: str, **kwargs) -> UrlRecordModel | None:
        with self._lock:
            return self._records.get(short_code)

    @beartype
    def exists(self, short_code: str, **kwargs) -> bool:
        with self._lock:
            return short_code in self._records

    @beartype
    def get_by_long_url(self, long_url: str, **kwargs) -> UrlRecordModel | None:
        with self._lock:
            short_code = self._codes_by_url.get(long_url)
            return self._records.get(short_code) if short_code is not None else None

    def all(self, **kwargs) -> list[UrlRecordModel]:
        with self._lock:
            return list(self._records.values())

    @beartype
    def increment_access_count(self, short_code: str, **kwargs) -> int | None:
        with self._lock:
            record = self._records.get(short_code)
            if record is None:
                return None
            updated = record.with_access_count(record.access_count + 1)
            self._records[short_code] = updated
        return updated.access_count

    def count(self, **kwargs) -> int:
        with self._lock:
            return len(self._records)
