"""Infrastructure repositories module."""
from .match_source import RiotMatchSource, parse_match_detail

__all__ = [
    'RiotMatchSource',
    'parse_match_detail',
]
