from headergrade.core.cache_manager.cache_manager import ScanResultsCache

__all__ = ["ScanResultsCache"]
