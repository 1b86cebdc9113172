"""Write coalescing."""

from .coordinator import FlushCoordinator, FlushState
from .timer import DebounceTimer

__all__ = ["FlushCoordinator", "FlushState", "DebounceTimer"]
