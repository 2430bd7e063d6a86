import fnmatch
import functools
import inspect
from datetime import datetime, timezone

from githours.logging import get_logger

logger = get_logger("cache")


class CacheEntry:
    """A cached value plus the time it was stored."""

    def __init__(self, data, cache_key=None):
        self.data = data
        self.cached_at = datetime.now(timezone.utc)
        self.cache_key = cache_key

    def age_seconds(self):
        return (datetime.now(timezone.utc) - self.cached_at).total_seconds()


class CacheMissError(Exception):
    pass


class EphemeralCache:
    """
    An in-memory cache holding at most ``max_keys`` entries; the least recently
    written key is evicted first.
    """

    def __init__(self, max_keys=1000):
        self._cache = {}
        self._key_list = []
        self._max_keys = max_keys

    def evict(self, n=1):
        for _ in range(min(n, len(self._key_list))):
            key = self._key_list.pop(0)
            del self._cache[key]

    def set(self, k, v):
        if k in self._cache:
            self._key_list.remove(k)
        self._key_list.append(k)

        if not isinstance(v, CacheEntry):
            v = CacheEntry(v, cache_key=k)
        self._cache[k] = v

        if len(self._key_list) > self._max_keys:
            self.evict(len(self._key_list) - self._max_keys)

    def get_entry(self, k):
        try:
            return self._cache[k]
        except KeyError as e:
            raise CacheMissError(k) from e

    def get(self, k):
        return self.get_entry(k).data

    def exists(self, k):
        return k in self._cache

    def list_cached_keys(self):
        return list(self._key_list)

    def invalidate_cache(self, keys=None, pattern=None):
        """Removes entries by exact key, by glob pattern, or all of them when neither is given.

        Returns:
            int: Number of entries removed.
        """
        if keys is None and pattern is None:
            removed = len(self._key_list)
            self._cache.clear()
            self._key_list.clear()
            return removed

        doomed = set(keys or [])
        if pattern is not None:
            doomed.update(k for k in self._key_list if fnmatch.fnmatch(k, pattern))

        removed = 0
        for k in doomed:
            if k in self._cache:
                del self._cache[k]
                self._key_list.remove(k)
                removed += 1
        return removed

    def get_cache_stats(self):
        ages = [entry.age_seconds() for entry in self._cache.values()]
        return {
            "total_entries": len(self._cache),
            "max_entries": self._max_keys,
            "oldest_entry_age_seconds": max(ages) if ages else None,
            "newest_entry_age_seconds": min(ages) if ages else None,
        }


def _key_value(v):
    # 120 and 120.0 are the same argument
    if isinstance(v, int) and not isinstance(v, bool):
        return repr(float(v))
    return repr(v)


def multicache(key_prefix, key_list):
    """Caches the result of a Repository method on ``self.cache_backend``.

    The key combines ``key_prefix``, the repository name, ``self.cache_state()`` (HEAD and
    the instance options) and the values of the arguments named in ``key_list``. Arguments
    are bound against the signature with defaults applied, so positional, keyword and
    omitted arguments with the same values share an entry. Passing
    ``force_refresh=True`` skips the read but still stores the fresh result.
    """

    def multicache_nest(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        def deco(self, *args, **kwargs):
            force_refresh = kwargs.pop("force_refresh", False)
            if self.cache_backend is None:
                return func(self, *args, **kwargs)

            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            key_parts = [f"{k}={_key_value(bound.arguments[k])}" for k in key_list]
            key = f"{key_prefix}||{self.repo_name}||{self.cache_state()}||{'_'.join(key_parts)}"

            if not force_refresh:
                try:
                    ret = self.cache_backend.get(key)
                    logger.debug(f"Cache hit for key: {key}")
                    return ret
                except CacheMissError:
                    logger.debug(f"Cache miss for key: {key}")
            else:
                logger.info(f"Force refresh for key: {key}, bypassing cache read.")

            ret = func(self, *args, **kwargs)
            self.cache_backend.set(key, ret)
            return ret

        return deco

    return multicache_nest
