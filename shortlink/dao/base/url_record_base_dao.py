"""Abstract base class for UrlRecord data access objects (DAOs).

This class establishes a consistent contract for all UrlRecord DAO implementations,
regardless of the underlying storage mechanism (e.g., in-process memory, Redis).

Responsibilities:
    - Provide forward (short code) and reverse (long URL) lookups of UrlRecordModel objects.
    - Provide an atomic "insert if absent" primitive keyed by the long URL.
    - Provide lossless, per-key atomic access counter increments.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, UTC
        >>> from shortlink.models import UrlRecordModel
        >>> from shortlink.dao.memory import UrlRecordMemoryDAO

        >>> dao = UrlRecordMemoryDAO()

        >>> record = UrlRecordModel(
        ...     short_code="aZ3kP9q",
        ...     long_url="https://example.com/blog/article-123",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.put(record)

        >>> dao.get("aZ3kP9q").long_url
        'https://example.com/blog/article-123'

        >>> dao.get_by_long_url("https://example.com/blog/article-123").short_code
        'aZ3kP9q'

        >>> dao.increment_access_count("aZ3kP9q")
        1
"""

from abc import ABC, abstractmethod

from shortlink.models import UrlRecordModel


class UrlRecordBaseDAO(ABC):
    """Interface for UrlRecord data access objects (DAOs).

    Methods:
        put(record: UrlRecordModel, **kwargs) -> UrlRecordBaseDAO:
            Insert or overwrite a record keyed by its short code.
            Raises DataStoreError on connection or write failure.

        put_if_absent(record: UrlRecordModel, **kwargs) -> UrlRecordModel:
            Atomically insert a record unless its long URL is already stored.
            Raises ShortCodeTakenError if the short code belongs to another URL.
            Raises DataStoreError on connection or write failure.

        get(short_code: str, **kwargs) -> UrlRecordModel | None:
            Point lookup by short code. Returns None if not found.

        exists(short_code: str, **kwargs) -> bool:
            Existence check by short code.

        get_by_long_url(long_url: str, **kwargs) -> UrlRecordModel | None:
            Reverse lookup by original URL. Returns None if not found.

        all(**kwargs) -> list[UrlRecordModel]:
            Snapshot of every stored record, in no particular order.

        increment_access_count(short_code: str, **kwargs) -> int | None:
            Atomically add 1 to the access counter. Returns None for unknown codes.

        count(**kwargs) -> int:
            Number of stored records.

    Subclassing:
        Datastore-specific implementations (e.g., UrlRecordMemoryDAO or
        UrlRecordRedisDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - Records are never deleted through the DAO. Deletion is an
          administrative concern outside of the application.
    """

    @abstractmethod
    def put(self, record: UrlRecordModel, **kwargs) -> 'UrlRecordBaseDAO':
        """Insert or overwrite a record keyed by its short code.

        Both lookup paths (short code and long URL) must reflect the record
        once this method returns.

        Args:
            record (UrlRecordModel):
                The record to store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecordBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def put_if_absent(self, record: UrlRecordModel, **kwargs) -> UrlRecordModel:
        """Atomically insert a record unless its long URL is already stored.

        Args:
            record (UrlRecordModel):
                The candidate record.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecordModel:
                The already stored record for `record.long_url` if there is one
                (nothing is written), otherwise `record` itself.

        Raises:
            ShortCodeTakenError:
                If `record.short_code` is assigned to a different long URL.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, short_code: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a record by its short code.

        Args:
            short_code (str):
                The short code of the record to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecordModel | None: The record if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, short_code: str, **kwargs) -> bool:
        """Check whether a short code is taken, without loading the record."""
        pass

    @abstractmethod
    def get_by_long_url(self, long_url: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a record by its original long URL (exact match)."""
        pass

    @abstractmethod
    def all(self, **kwargs) -> list[UrlRecordModel]:
        """Return a snapshot of every stored record. Order is not guaranteed."""
        pass

    @abstractmethod
    def increment_access_count(self, short_code: str, **kwargs) -> int | None:
        """Atomically increment a record's access counter by exactly 1.

        Args:
            short_code (str):
                The short code of the accessed record.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int | None:
                The updated access count, or None if the short code does not exist
                (in which case nothing is written).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Return the number of stored records."""
        pass
