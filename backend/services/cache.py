"""
Key-Value Store for Wrapped State

Everything the Wrapped feature persists (the semester snapshot and the
"viewed" record) goes through a tiny get/set contract on string keys:

    store.get(key) -> Optional[str]
    store.set(key, value) -> bool

Backends:
- MemoryStore: in-process dict (tests, single-process dev)
- RedisStore: Redis, no TTL (a same-semester snapshot stays valid)
- FirestoreStore: see services/firestore_store.py

Store failures never propagate: reads degrade to None, writes to False.
"""

from typing import Any, Dict, Optional, Protocol
from urllib.parse import quote

import redis

from core.config import (
    DEFAULT_REDIS_URL,
    REDIS_URL,
    REDIS_HOST,
    REDIS_PORT,
    REDIS_DB,
    REDIS_PASSWORD,
    WRAPPED_STORE_BACKEND,
)

# Cache key prefixes
CACHE_PREFIX = "classpro:"
WRAPPED_CACHE_KEY = f"{CACHE_PREFIX}wrapped_cache"
WRAPPED_VIEWED_KEY = f"{CACHE_PREFIX}wrapped_viewed"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> bool:
        ...


def namespaced_key(key: str, student_id: Optional[str] = None) -> str:
    """
    Scope a store key to one student.

    "classpro:wrapped_cache" -> "classpro:RA2211003010001:wrapped_cache"

    The id is percent-encoded, so distinct ids never share a slot
    ("ra/22" -> "ra%2F22", "ra-22" stays "ra-22").
    """
    if not student_id or not student_id.strip():
        return key
    sanitized = quote(student_id.strip(), safe="")
    suffix = key[len(CACHE_PREFIX):] if key.startswith(CACHE_PREFIX) else key
    return f"{CACHE_PREFIX}{sanitized}:{suffix}"


class MemoryStore:
    """Dict-backed store, one instance per process"""

    def __init__(self):
        self._data: Dict[str, str] = {}

    @property
    def is_connected(self) -> bool:
        return True

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def delete(self, key: str) -> bool:
        self._data.pop(key, None)
        return True

    def get_stats(self) -> Dict[str, Any]:
        return {"connected": True, "backend": "memory", "total_keys": len(self._data)}


class RedisStore:
    """
    Redis-backed store for the Wrapped snapshot and viewed records.

    Values are written without a TTL: a snapshot must outlive the whole
    Wrapped window, and a stale one is rejected by semester id instead.
    """

    CLIENT_OPTIONS = {
        "decode_responses": True,
        "socket_timeout": 5,
        "socket_connect_timeout": 5,
    }

    def __init__(self):
        self._client: Optional[redis.Redis] = None
        self._connected = False

    def _build_client(self) -> redis.Redis:
        """An explicit REDIS_URL wins over REDIS_HOST/REDIS_PORT"""
        if REDIS_URL and REDIS_URL != DEFAULT_REDIS_URL:
            return redis.from_url(REDIS_URL, **self.CLIENT_OPTIONS)
        return redis.Redis(
            host=REDIS_HOST,
            port=REDIS_PORT,
            db=REDIS_DB,
            password=REDIS_PASSWORD,
            **self.CLIENT_OPTIONS
        )

    def connect(self) -> bool:
        """
        Open a client and ping it.

        Returns:
            True if the Wrapped store is reachable, False otherwise (never raises)
        """
        try:
            client = self._build_client()
            client.ping()
        except Exception as e:
            print(f"[CACHE] Wrapped store unreachable: {e}")
            self._client = None
            self._connected = False
            return False

        self._client = client
        self._connected = True
        target = "REDIS_URL" if REDIS_URL != DEFAULT_REDIS_URL else f"{REDIS_HOST}:{REDIS_PORT}"
        print(f"[CACHE] Wrapped store on Redis ({target})")
        return True

    @property
    def is_connected(self) -> bool:
        """Ping the open client; a failed ping marks the store for reconnect"""
        if not (self._connected and self._client):
            return False
        try:
            self._client.ping()
        except Exception:
            self._connected = False
            return False
        return True

    def _ensure_connected(self) -> bool:
        return self.is_connected or self.connect()

    def get(self, key: str) -> Optional[str]:
        """Get raw value from Redis"""
        if not self._ensure_connected():
            return None

        try:
            data = self._client.get(key)
            return data if data else None
        except Exception as e:
            print(f"[CACHE] Get error for {key}: {e}")
            return None

    def set(self, key: str, value: str) -> bool:
        """Store value without expiry"""
        if not self._ensure_connected():
            return False

        try:
            self._client.set(key, value)
            return True
        except Exception as e:
            print(f"[CACHE] Set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete a key from Redis"""
        if not self._ensure_connected():
            return False

        try:
            self._client.delete(key)
            return True
        except Exception as e:
            print(f"[CACHE] Delete error for {key}: {e}")
            return False

    def get_stats(self) -> Dict[str, Any]:
        """Reachability, hit/miss counters and the number of classpro: keys"""
        if not self._ensure_connected():
            return {"connected": False, "backend": "redis"}

        try:
            info = self._client.info("stats")
            memory = self._client.info("memory")
            wrapped_keys = len(self._client.keys(f"{CACHE_PREFIX}*"))

            return {
                "connected": True,
                "backend": "redis",
                "hits": info.get("keyspace_hits", 0),
                "misses": info.get("keyspace_misses", 0),
                "memory_used": memory.get("used_memory_human", "unknown"),
                "total_keys": wrapped_keys
            }
        except Exception as e:
            return {"connected": True, "backend": "redis", "error": str(e)}


_store_instance = None


def create_store(backend: Optional[str] = None):
    """Build a store for the named backend (defaults to WRAPPED_STORE_BACKEND)"""
    backend = backend or WRAPPED_STORE_BACKEND
    if backend == "redis":
        store = RedisStore()
        store.connect()
        return store
    if backend == "firestore":
        from services.firestore_store import FirestoreStore
        return FirestoreStore()
    if backend != "memory":
        print(f"[CACHE] Unknown store backend {backend!r}, using memory")
    return MemoryStore()


def get_store():
    """Get the singleton store instance"""
    global _store_instance
    if _store_instance is None:
        _store_instance = create_store()
    return _store_instance


def reset_store() -> None:
    """Drop the singleton (tests, backend switch)"""
    global _store_instance
    _store_instance = None
