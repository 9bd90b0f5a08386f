"""Centralized cache key patterns"""

class CacheKeys:
    """Cache key generators for consistent naming"""

    @staticmethod
    def payment_sync_lock():
        return 'payments:sync:lock'
