from typing import Any


# Type aliases for Python dictionaries
type AppConfig = dict[str, Any]
type RecordMapping = dict[str, str]
