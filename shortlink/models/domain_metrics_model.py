from typing import NamedTuple


class DomainMetricsModel(NamedTuple):
    """Number of stored URLs pointing at a single domain.

    Being a tuple, an instance compares equal to a plain ``(domain, count)`` pair.

    Example:
        >>> DomainMetricsModel(domain='udemy.com', count=6) == ('udemy.com', 6)
        True
    """

    domain: str  # Host with any leading 'www.' stripped
    count: int  # Number of records for the domain
