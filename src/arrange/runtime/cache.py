"""Thread-safe template cache.

Memoizes compiled templates by exact pattern string for one engine.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - Insert-if-absent: when two threads compile the same pattern, the first
      stored template wins and both callers receive it
    - No eviction: entries live as long as the engine (call clear() to drop)

Thread Safety:
    All operations protected by RLock. Safe for concurrent reads and writes.

Python 3.13+. Zero external dependencies.
"""

from threading import RLock

from arrange.runtime.template import Template

__all__ = ["TemplateCache"]


class TemplateCache:
    """Pattern string -> compiled Template.

    Attributes:
        hits: Number of lookups answered from the cache
        misses: Number of lookups that found nothing
    """

    __slots__ = ("_entries", "_hits", "_lock", "_misses")

    def __init__(self) -> None:
        self._entries: dict[str, Template] = {}
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def get(self, pattern: str) -> Template | None:
        """Get the cached template for a pattern, or None on a miss."""
        with self._lock:
            template = self._entries.get(pattern)
            if template is None:
                self._misses += 1
            else:
                self._hits += 1
            return template

    def put(self, pattern: str, template: Template) -> Template:
        """Store a template unless one is already cached for the pattern.

        Returns:
            The cached template (the existing one if present)
        """
        with self._lock:
            return self._entries.setdefault(pattern, template)

    def clear(self) -> None:
        """Drop all entries and reset metrics."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Number of cached templates
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        with self._lock:
            return self._misses

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._entries
