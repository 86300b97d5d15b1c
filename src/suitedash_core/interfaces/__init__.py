"""Public interface re-exports for suitedash_core."""

from suitedash_core.interfaces.sources import DetailSource, ListSource
from suitedash_core.interfaces.storage import KeyValueStorage

__all__ = [
    "DetailSource",
    "KeyValueStorage",
    "ListSource",
]
