"""
Cache utilities for the widget API.

Provides Redis-backed caching with graceful fallback to simple in-memory caching,
and a two layer cache built on top of it:

    item layer   one entry per record id           (CACHE_ITEM_TTL, 15 min)
    query layer  one entry per query + params,      (CACHE_QUERY_TTL, 5 min for
                 holding the ordered list of ids     complete queries;
                                                     CACHE_FACET_TTL, 1 min for
                                                     filtered queries)

A query entry is only served when every id it references is still present in
the item layer. Any write invalidates all query entries of that cache.

Usage:
    from sample_app.utils.cache import TwoLayerCache

    widget_cache = TwoLayerCache('widget')

    items = widget_cache.get_query('all')
    if items is None:
        items = load_from_db()
        widget_cache.set_query('all', None, items, complete=True)

Environment Variables:
    REDIS_URL: Redis connection URL (e.g., redis://localhost:6379/0)
              Falls back to simple cache if not set or unavailable.
"""
import json
import os
import logging
import uuid
from typing import Optional

from flask import current_app
from flask_caching import Cache

logger = logging.getLogger(__name__)

# Global cache instance - initialized in init_cache()
cache = Cache()

CACHE_KEY_PREFIX = 'sample_app:'

# Generation tokens never expire; 0 means "no timeout" for Flask-Caching backends
NO_TIMEOUT = 0


def init_cache(app):
    """
    Initialize Flask-Caching with Redis or fallback to simple cache.

    Args:
        app: Flask application instance

    Returns:
        bool: True if Redis connected, False if using fallback
    """
    redis_url = os.getenv('REDIS_URL')
    default_timeout = app.config.get('CACHE_ITEM_TTL', 900)

    if redis_url and not app.config.get('TESTING'):
        try:
            # Test Redis connection before configuring
            import redis
            r = redis.from_url(redis_url, socket_connect_timeout=2)
            r.ping()

            app.config['CACHE_TYPE'] = 'RedisCache'
            app.config['CACHE_REDIS_URL'] = redis_url
            app.config['CACHE_DEFAULT_TIMEOUT'] = default_timeout
            app.config['CACHE_KEY_PREFIX'] = CACHE_KEY_PREFIX

            cache.init_app(app)
            logger.info('Redis cache connected: %s', redis_url.split('@')[-1])
            return True

        except Exception as e:
            logger.warning('Redis unavailable (%s), using simple cache', str(e))

    # Fallback to simple in-memory cache
    app.config['CACHE_TYPE'] = 'SimpleCache'
    app.config['CACHE_DEFAULT_TIMEOUT'] = default_timeout

    cache.init_app(app)
    logger.info('Using simple in-memory cache (no Redis)')
    return False


def cache_key(*args, **kwargs):
    """
    Generate a cache key from function arguments.

        key = cache_key('widget', 'item', widget_id)
    """
    parts = list(args)
    for k, v in sorted(kwargs.items()):
        parts.append(f'{k}={v}')
    return ':'.join(str(p) for p in parts)


def backend_name() -> str:
    """Name of the configured cache backend for the current app."""
    return current_app.config.get('CACHE_TYPE', 'SimpleCache')


class TwoLayerCache:
    """
    Item + query cache for one record type.

    Values are the serialized dicts returned by the services, keyed by
    their 'id'. Hit/miss counters are kept per Flask app.
    """

    STAT_NAMES = ('item_hits', 'item_misses', 'query_hits', 'query_misses', 'invalidations')

    def __init__(self, name: str):
        self.name = name

    # ---- configuration ----

    @property
    def item_ttl(self) -> int:
        return current_app.config.get('CACHE_ITEM_TTL', 900)

    @property
    def query_ttl(self) -> int:
        return current_app.config.get('CACHE_QUERY_TTL', 300)

    @property
    def facet_ttl(self) -> int:
        return current_app.config.get('CACHE_FACET_TTL', 60)

    def _debug(self, message, *args):
        if current_app.config.get('CACHE_DEBUG_LOGGING'):
            logger.info('[%s cache] ' + message, self.name, *args)

    # ---- stats ----

    @property
    def stats(self) -> dict:
        all_stats = current_app.extensions.setdefault('two_layer_cache_stats', {})
        if self.name not in all_stats:
            all_stats[self.name] = {name: 0 for name in self.STAT_NAMES}
        return all_stats[self.name]

    def _count(self, stat: str):
        self.stats[stat] += 1

    # ---- keys ----

    def _generation(self, layer: str) -> str:
        """Current generation token of a layer; bumping it orphans every key built from it."""
        key = cache_key(self.name, layer, 'generation')
        token = cache.get(key)
        if token is None:
            token = uuid.uuid4().hex
            cache.set(key, token, timeout=NO_TIMEOUT)
        return token

    def _bump_generation(self, layer: str):
        cache.set(cache_key(self.name, layer, 'generation'), uuid.uuid4().hex, timeout=NO_TIMEOUT)

    def _item_key(self, item_id) -> str:
        return cache_key(self.name, 'item', self._generation('items'), item_id)

    def _query_key(self, query: str, params: Optional[dict]) -> str:
        params_key = json.dumps(params or {}, sort_keys=True, default=str)
        return cache_key(self.name, 'query', self._generation('queries'), query, params_key)

    # ---- item layer ----

    def get_item(self, item_id) -> Optional[dict]:
        value = cache.get(self._item_key(item_id))
        if value is None:
            self._count('item_misses')
            self._debug('item miss id=%s', item_id)
            return None
        self._count('item_hits')
        self._debug('item hit id=%s', item_id)
        return value

    def set_item(self, item: dict):
        cache.set(self._item_key(item['id']), item, timeout=self.item_ttl)

    def delete_item(self, item_id):
        cache.delete(self._item_key(item_id))

    # ---- query layer ----

    def get_query(self, query: str, params: Optional[dict] = None) -> Optional[list]:
        """Return the cached result of a query, or None on a miss."""
        ids = cache.get(self._query_key(query, params))
        if ids is None:
            self._count('query_misses')
            self._debug('query miss %s %s', query, params or {})
            return None

        items = cache.get_many(*[self._item_key(item_id) for item_id in ids]) if ids else []
        if any(item is None for item in items):
            # An item expired before the query did
            self._count('query_misses')
            self._debug('query %s %s references expired items', query, params or {})
            return None

        self._count('query_hits')
        self._debug('query hit %s %s (%d items)', query, params or {}, len(items))
        return list(items)

    def set_query(self, query: str, params: Optional[dict], items: list, complete: bool = False):
        """
        Cache a query result.

        Args:
            query: Query name ('all' or a finder name)
            params: Query parameters, part of the key
            items: Serialized records, each with an 'id'
            complete: True for unfiltered queries (longer TTL)
        """
        for item in items:
            self.set_item(item)
        timeout = self.query_ttl if complete else self.facet_ttl
        cache.set(self._query_key(query, params), [item['id'] for item in items], timeout=timeout)
        self._debug('cached query %s %s (%d items, ttl=%ss)', query, params or {}, len(items), timeout)

    def invalidate_queries(self):
        """Drop every cached query result for this record type."""
        self._bump_generation('queries')
        self._count('invalidations')
        self._debug('query layer invalidated')

    def clear(self):
        """Drop both layers."""
        self._bump_generation('items')
        self._bump_generation('queries')
        self._count('invalidations')
        self._debug('cache cleared')

    def describe(self) -> dict:
        """Layer configuration and counters, for the cache info endpoint."""
        return {
            'name': self.name,
            'itemLayer': {'ttl': self.item_ttl},
            'queryLayer': {
                'complete': {'ttl': self.query_ttl},
                'facet': {'ttl': self.facet_ttl},
            },
            'stats': dict(self.stats),
        }
