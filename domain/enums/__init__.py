"""Domain enumerations."""
from .region import Region
from .role import Role
from .fetch_error_kind import FetchErrorKind
from .stat_metric import StatMetric

__all__ = [
    'Region',
    'Role',
    'FetchErrorKind',
    'StatMetric',
]
