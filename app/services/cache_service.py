# app/services/cache_service.py
import json

import redis

from app.utils.logging import get_logger
from app.utils.retry import redis_retry
from app.utils.settings import CACHE_ENABLED, CACHE_PREFIX, CACHE_TTL_SECONDS, REDIS_URL

logger = get_logger(__name__)


class CacheService:
    """
    -odczyt/zapis JSON w redisie z TTL
    -uniewaznianie kluczy po zmianie encji
    -przy enabled=False nic nie robi (get zwraca None)

    Bledy redisa (po retry) leca dalej, wywolujacy decyduje co z nimi zrobic.
    """

    def __init__(
        self,
        url: str | None = None,
        enabled: bool = CACHE_ENABLED,
        ttl: int = CACHE_TTL_SECONDS,
        prefix: str = CACHE_PREFIX,
    ):
        self.enabled = enabled
        self.ttl = ttl
        self.prefix = prefix
        self.redis = redis.Redis.from_url(url or REDIS_URL, decode_responses=True) if enabled else None

    def key(self, *parts) -> str:
        #store:product:1
        return self.prefix + ":".join(str(p) for p in parts)

    @redis_retry()
    def get_json(self, key: str):
        if not self.enabled:
            return None
        raw = self.redis.get(key)
        if raw is None:
            return None
        logger.debug(f"Cache hit {key}")
        return json.loads(raw)

    @redis_retry()
    def set_json(self, key: str, value, ttl: int | None = None) -> None:
        if not self.enabled:
            return
        #SET store:product:1 "{...}" EX 300
        self.redis.set(name=key, value=json.dumps(value), ex=ttl or self.ttl)

    @redis_retry()
    def invalidate(self, *keys: str) -> int:
        if not self.enabled or not keys:
            return 0
        logger.debug(f"Cache invalidate {', '.join(keys)}")
        return int(self.redis.delete(*keys))

    @redis_retry()
    def ping(self) -> bool:
        if not self.enabled:
            return False
        return bool(self.redis.ping())


_cache: CacheService | None = None


def get_cache() -> CacheService:
    """Dependency FastAPI, jeden klient redisa na proces."""
    global _cache
    if _cache is None:
        _cache = CacheService()
    return _cache
