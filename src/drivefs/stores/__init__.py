"""Remote store implementations.

The Google Drive store lives in ``drivefs.stores.google_drive`` and is
imported on demand so that the Drive client is only loaded when used.
"""

from drivefs.stores.memory import MemoryStore

__all__ = ["MemoryStore"]
