"""
Timeout-protected regex execution for the repair pipeline.

Every pattern-based repair in smartjson runs through ``RegexEngine``:
- patterns are compiled with the ``regex`` module and kept in an LRU cache
- each operation passes a timeout to ``regex`` to stop runaway backtracking
- operation counts, timeouts and cache efficiency are tracked

Untrusted model output is the normal input here, so the default timeout
behaviour hands the input back unchanged instead of raising.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

import regex

from ..utils.exceptions import ConfigurationError, RegexTimeoutError

logger = logging.getLogger(__name__)

Replacement = Union[str, Callable[[Any], str]]


class TimeoutBehavior(Enum):
    """What the engine does when a pattern runs out of time."""

    RAISE_EXCEPTION = "raise"
    RETURN_ORIGINAL = "original"
    LOG_AND_CONTINUE = "log"


@dataclass
class RegexConfig:
    """Timeout, cache and monitoring settings for ``RegexEngine``."""

    default_timeout: float = 1.0
    timeout_behavior: TimeoutBehavior = TimeoutBehavior.RETURN_ORIGINAL

    cache_size: int = 128
    cache_enabled: bool = True

    enable_metrics: bool = True
    log_slow_patterns: bool = False
    slow_threshold_ms: float = 100.0

    def __post_init__(self) -> None:
        if self.default_timeout <= 0:
            raise ConfigurationError("default_timeout must be positive")
        if self.cache_size < 0:
            raise ConfigurationError("cache_size must not be negative")


@dataclass
class RegexMetrics:
    """Counters for engine activity, safe to update from several threads."""

    total_operations: int = 0
    timeouts: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    timeout_patterns: dict[str, int] = field(default_factory=dict)

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def operation(self) -> None:
        with self._lock:
            self.total_operations += 1

    def lookup(self, hit: bool) -> None:
        """Count one cache lookup."""
        with self._lock:
            if hit:
                self.cache_hits += 1
            else:
                self.cache_misses += 1

    def timed_out(self, pattern: str) -> None:
        """Count a timeout against ``pattern``."""
        with self._lock:
            self.timeouts += 1
            count = self.timeout_patterns.get(pattern, 0)
            self.timeout_patterns[pattern] = count + 1

    @property
    def cache_hit_rate(self) -> float:
        """Percentage of lookups served from the cache."""
        with self._lock:
            lookups = self.cache_hits + self.cache_misses
            return 100.0 * self.cache_hits / lookups if lookups else 0.0


class PatternCache:
    """Compiled patterns keyed by ``(pattern, flags)``, least recently used out."""

    def __init__(self, maxsize: int = 128):
        self.maxsize = maxsize
        self._entries: "OrderedDict[tuple[str, int], Any]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, pattern: str, flags: int) -> Optional[Any]:
        with self._lock:
            compiled = self._entries.get((pattern, flags))
            if compiled is not None:
                self._entries.move_to_end((pattern, flags))
            return compiled

    def put(self, pattern: str, flags: int, compiled: Any) -> None:
        if self.maxsize <= 0:
            return
        with self._lock:
            self._entries[(pattern, flags)] = compiled
            self._entries.move_to_end((pattern, flags))
            if len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class RegexEngine:
    """
    Compiles, caches and runs the patterns used by preprocessing steps.

    ``search`` and ``sub`` mirror the ``regex`` module's functions with an
    added ``timeout`` argument; the configured ``TimeoutBehavior`` decides
    whether a timeout raises ``RegexTimeoutError`` or is absorbed.
    """

    def __init__(self, config: Optional[RegexConfig] = None):
        self.config = config or RegexConfig()
        self.cache: Optional[PatternCache] = None
        if self.config.cache_enabled:
            self.cache = PatternCache(self.config.cache_size)
        self.metrics: Optional[RegexMetrics] = None
        if self.config.enable_metrics:
            self.metrics = RegexMetrics()
        logger.info(
            "RegexEngine initialized (timeout=%ss, behavior=%s)",
            self.config.default_timeout,
            self.config.timeout_behavior.value,
        )

    def _compile(self, pattern: str, flags: int = 0) -> Any:
        compiled = self.cache.get(pattern, flags) if self.cache is not None else None
        if self.metrics is not None:
            self.metrics.lookup(hit=compiled is not None)
        if compiled is None:
            compiled = regex.compile(pattern, flags)
            if self.cache is not None:
                self.cache.put(pattern, flags, compiled)
        return compiled

    def _run(self, operation: str, pattern: str, call: Callable[[], Any]) -> Any:
        """Run ``call`` and record it; a ``TimeoutError`` propagates."""
        started = time.perf_counter()
        result = call()
        elapsed_ms = (time.perf_counter() - started) * 1000

        if self.metrics is not None:
            self.metrics.operation()
        if self.config.log_slow_patterns and elapsed_ms > self.config.slow_threshold_ms:
            logger.debug(
                "Slow regex %s (%.1f ms): %s", operation, elapsed_ms, pattern[:50]
            )
        return result

    def search(
        self,
        pattern: str,
        string: str,
        flags: int = 0,
        timeout: Optional[float] = None,
    ) -> Optional[Any]:
        """
        Find the first match of ``pattern`` in ``string``.

        A search that times out under a non-raising behavior reports no match.
        """
        compiled = self._compile(pattern, flags)
        limit = timeout or self.config.default_timeout
        try:
            return self._run(
                "search",
                pattern,
                lambda: compiled.search(string, timeout=limit),
            )
        except TimeoutError as e:
            self._on_timeout("search", pattern, string, limit, e)
            return None

    def sub(
        self,
        pattern: str,
        repl: Replacement,
        string: str,
        count: int = 0,
        flags: int = 0,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Replace matches of ``pattern`` in ``string``.

        A substitution that times out under a non-raising behavior returns
        ``string`` unchanged.
        """
        compiled = self._compile(pattern, flags)
        limit = timeout or self.config.default_timeout
        try:
            return self._run(  # type: ignore[no-any-return]
                "sub",
                pattern,
                lambda: compiled.sub(repl, string, count=count, timeout=limit),
            )
        except TimeoutError as e:
            self._on_timeout("sub", pattern, string, limit, e)
            return string

    def _on_timeout(
        self,
        operation: str,
        pattern: str,
        string: str,
        timeout: float,
        error: TimeoutError,
    ) -> None:
        if self.metrics is not None:
            self.metrics.timed_out(pattern)

        if self.config.timeout_behavior is TimeoutBehavior.RAISE_EXCEPTION:
            raise RegexTimeoutError(pattern, len(string), timeout, operation) from error
        if self.config.timeout_behavior is TimeoutBehavior.LOG_AND_CONTINUE:
            logger.warning(
                "Regex %s timed out after %ss on %d chars: %s",
                operation,
                timeout,
                len(string),
                pattern[:50],
            )

    def get_metrics(self) -> Optional[RegexMetrics]:
        """Counters collected so far, or None when metrics are disabled."""
        return self.metrics

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()


_shared_engine: Optional[RegexEngine] = None
_shared_engine_lock = threading.Lock()


def get_engine(config: Optional[RegexConfig] = None) -> RegexEngine:
    """
    Return the process-wide engine used by the preprocessing steps.

    ``config`` only takes effect when the engine is created, i.e. on the
    first call or the first call after ``reset_engine``.
    """
    global _shared_engine

    with _shared_engine_lock:
        if _shared_engine is None:
            _shared_engine = RegexEngine(config)
        return _shared_engine


def reset_engine() -> None:
    """Drop the process-wide engine; the next ``get_engine`` builds a new one."""
    global _shared_engine
    with _shared_engine_lock:
        _shared_engine = None
