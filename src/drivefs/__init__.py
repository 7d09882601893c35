"""Path-based file operations over local disk or a cloud node-graph store."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from drivefs.protocols import (
    FileSystem,
    RemoteStore,
)

__all__ = [
    "__version__",
    "FileSystem",
    "RemoteStore",
]
