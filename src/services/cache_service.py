"""
缓存服务
按命名空间划分的键值缓存，支持读穿透、写穿透和整命名空间失效。
提供进程内内存缓存和Redis缓存两种实现。
"""
import copy
import logging
import pickle
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import redis.asyncio as redis
from redis.exceptions import RedisError

from src.config import Settings

logger = logging.getLogger(__name__)

# 缓存命名空间
BOOKS_CACHE = "books"
BOOKS_ALL_CACHE = "books_all"
BOOKS_SEARCH_CACHE = "books_search"


class CacheService(ABC):
    """缓存服务基类"""

    backend_name = "base"

    def __init__(self, ttl_seconds: int = 0):
        self.ttl_seconds = ttl_seconds
        self.cache_stats = {
            'hits': 0,
            'misses': 0,
        }

    async def get_or_compute(self, namespace: str, key: Any, compute: Callable[[], Awaitable[Any]]) -> Any:
        """读穿透：命中直接返回，未命中则计算并写入缓存"""
        found, value = await self._get(namespace, key)
        if found:
            self.cache_stats['hits'] += 1
            return value

        self.cache_stats['misses'] += 1
        logger.debug(f"缓存未命中: {namespace}[{key}]")
        # compute 抛出异常时不写缓存
        value = await compute()
        await self.put(namespace, key, value)
        return value

    @abstractmethod
    async def _get(self, namespace: str, key: Any) -> Tuple[bool, Any]:
        """返回 (是否命中, 值)"""

    @abstractmethod
    async def put(self, namespace: str, key: Any, value: Any) -> None:
        """写入或覆盖条目"""

    @abstractmethod
    async def evict_all(self, namespace: str) -> int:
        """清空整个命名空间，返回删除的条目数"""

    @abstractmethod
    async def clear(self) -> None:
        """清空全部缓存"""

    async def close(self) -> None:
        pass

    def get_stats(self) -> Dict[str, Any]:
        """获取缓存统计"""
        stats = self.cache_stats.copy()
        stats['backend'] = self.backend_name
        total = stats['hits'] + stats['misses']
        stats['hit_ratio'] = stats['hits'] / total if total else 0.0
        return stats


class MemoryCacheService(CacheService):
    """
    进程内内存缓存
    存取时都做深拷贝，调用方修改返回值不会影响缓存（与Redis的序列化行为一致）。
    每个命名空间最多保留 max_entries 条，超出时淘汰最早写入的10%。
    """

    backend_name = "memory"

    def __init__(self, ttl_seconds: int = 0, max_entries: int = 1000):
        super().__init__(ttl_seconds)
        self.max_entries = max_entries
        self._store: Dict[str, Dict[Any, Tuple[Any, Optional[datetime]]]] = {}
        self._lock = threading.RLock()

    async def _get(self, namespace: str, key: Any) -> Tuple[bool, Any]:
        with self._lock:
            entries = self._store.get(namespace)
            if not entries or key not in entries:
                return False, None
            value, expires_at = entries[key]
            if expires_at is not None and datetime.now() >= expires_at:
                # 已过期，移除
                del entries[key]
                return False, None
            return True, copy.deepcopy(value)

    async def put(self, namespace: str, key: Any, value: Any) -> None:
        expires_at = None
        if self.ttl_seconds > 0:
            expires_at = datetime.now() + timedelta(seconds=self.ttl_seconds)
        value = copy.deepcopy(value)
        with self._lock:
            entries = self._store.setdefault(namespace, {})
            # 覆盖时移到末尾，字典顺序即写入顺序
            entries.pop(key, None)
            entries[key] = (value, expires_at)

            # 限制命名空间大小（max_entries <= 0 表示不限制）
            if 0 < self.max_entries < len(entries):
                overflow = len(entries) - self.max_entries
                drop = max(overflow, self.max_entries // 10)
                for old_key in list(entries)[:drop]:
                    del entries[old_key]
                logger.debug(f"缓存命名空间 {namespace} 超出上限，淘汰 {drop} 条")

    async def evict_all(self, namespace: str) -> int:
        with self._lock:
            entries = self._store.pop(namespace, {})
        if entries:
            logger.debug(f"清空缓存命名空间 {namespace}: {len(entries)} 条")
        return len(entries)

    async def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self, namespace: Optional[str] = None) -> int:
        """缓存条目数（可按命名空间统计）"""
        with self._lock:
            if namespace is not None:
                return len(self._store.get(namespace, {}))
            return sum(len(entries) for entries in self._store.values())

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats['memory_cache_size'] = self.size()
        return stats


class RedisCacheService(CacheService):
    """Redis缓存，值使用pickle序列化"""

    backend_name = "redis"

    def __init__(self, client: redis.Redis, ttl_seconds: int = 0, key_prefix: str = "library_cache"):
        super().__init__(ttl_seconds)
        self.client = client
        self.key_prefix = key_prefix

    def _make_key(self, namespace: str, key: Any) -> str:
        return f"{self.key_prefix}:{namespace}:{key}"

    async def _get(self, namespace: str, key: Any) -> Tuple[bool, Any]:
        data = await self.client.get(self._make_key(namespace, key))
        if data is None:
            return False, None
        return True, pickle.loads(data)

    async def put(self, namespace: str, key: Any, value: Any) -> None:
        await self.client.set(
            self._make_key(namespace, key),
            pickle.dumps(value),
            ex=self.ttl_seconds if self.ttl_seconds > 0 else None,
        )

    async def evict_all(self, namespace: str) -> int:
        return await self._delete_matching(f"{self.key_prefix}:{namespace}:*")

    async def clear(self) -> None:
        await self._delete_matching(f"{self.key_prefix}:*")

    async def _delete_matching(self, pattern: str) -> int:
        keys = [key async for key in self.client.scan_iter(match=pattern)]
        if not keys:
            return 0
        return await self.client.delete(*keys)

    async def close(self) -> None:
        await self.client.aclose()


async def create_cache(settings: Settings) -> CacheService:
    """根据配置创建缓存服务；Redis不可用时回退到内存缓存"""
    backend = settings.cache_backend.lower()
    if backend == "memory":
        logger.info("使用内存缓存")
        return MemoryCacheService(ttl_seconds=settings.cache_ttl, max_entries=settings.cache_max_entries)

    if backend != "redis":
        raise ValueError(f"Unknown cache backend: {settings.cache_backend}")

    client = redis.from_url(
        settings.redis_url,
        socket_connect_timeout=1,
        socket_timeout=1,
        health_check_interval=30,
    )
    try:
        await client.ping()
    except RedisError as e:
        logger.warning(f"Redis连接失败: {e}，改用内存缓存")
        await client.aclose()
        return MemoryCacheService(ttl_seconds=settings.cache_ttl, max_entries=settings.cache_max_entries)

    logger.info("Redis缓存初始化成功")
    return RedisCacheService(client, ttl_seconds=settings.cache_ttl, key_prefix=settings.cache_key_prefix)
