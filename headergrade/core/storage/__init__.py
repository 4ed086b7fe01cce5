from headergrade.core.storage.memory import MemoryScanStore

__all__ = ["MemoryScanStore"]
