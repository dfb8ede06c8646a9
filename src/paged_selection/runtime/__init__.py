"""Runtime services shared by the store, the selection model and adapters."""

from .bus import EventBus
from .config import Settings

__all__ = ["EventBus", "Settings"]
