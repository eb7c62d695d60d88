"""
DevPalette Persistence Backends
Key-value stores that hold the color and palette collections as JSON.
"""
import json
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import redis
from loguru import logger

from devpalette.config import Config


class KeyValueBackend(ABC):
    """Abstract base class for persistence backends."""

    @abstractmethod
    def read(self, key: str) -> Optional[Any]:
        """Read the JSON value stored under key, None when absent."""
        pass

    @abstractmethod
    def write(self, key: str, value: Any) -> bool:
        """Store value under key as JSON. Returns False on failure."""
        pass


def _serialize(key: str, value: Any) -> Optional[str]:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        logger.error(f"Cannot serialize value for key {key}: {e}")
        return None


def _deserialize(key: str, raw: Optional[str]) -> Optional[Any]:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored value for key {key} is not valid JSON: {e}")
        return None


class InMemoryBackend(KeyValueBackend):
    """In-process backend. Values are held as JSON text, like browser local storage."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def read(self, key: str) -> Optional[Any]:
        return _deserialize(key, self._data.get(key))

    def write(self, key: str, value: Any) -> bool:
        serialized = _serialize(key, value)
        if serialized is None:
            return False
        self._data[key] = serialized
        return True


class JsonFileBackend(KeyValueBackend):
    """Single local JSON file holding every key."""

    def __init__(self, path: str):
        self.path = path
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Storage file {self.path} unreadable, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object, starting empty")
            return {}
        return data

    def _flush(self) -> bool:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._data, fh)
            os.replace(tmp_path, self.path)
            return True
        except OSError as e:
            logger.error(f"Failed to write storage file {self.path}: {e}")
            return False

    def read(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def write(self, key: str, value: Any) -> bool:
        serialized = _serialize(key, value)
        if serialized is None:
            return False
        previous = self._data.get(key)
        had_key = key in self._data
        self._data[key] = json.loads(serialized)
        if self._flush():
            return True
        # Keep the in-memory mirror identical to the file
        if had_key:
            self._data[key] = previous
        else:
            self._data.pop(key, None)
        return False


class RedisBackend(KeyValueBackend):
    """Redis backend for a local redis server."""

    def __init__(self, redis_url: str = "redis://localhost:6379", db: int = 0, namespace: str = "devpalette"):
        self.namespace = namespace
        self.redis_client = redis.from_url(redis_url, db=db, decode_responses=True)
        self._test_connection()

    def _test_connection(self):
        """Test Redis connection."""
        try:
            self.redis_client.ping()
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.error(f"Redis connection failed: {e}")
            raise

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def read(self, key: str) -> Optional[Any]:
        try:
            raw = self.redis_client.get(self._key(key))
        except redis.RedisError as e:
            logger.error(f"Redis get failed for key {key}: {e}")
            return None
        return _deserialize(key, raw)

    def write(self, key: str, value: Any) -> bool:
        serialized = _serialize(key, value)
        if serialized is None:
            return False
        try:
            return bool(self.redis_client.set(self._key(key), serialized))
        except redis.RedisError as e:
            logger.error(f"Redis set failed for key {key}: {e}")
            return False


def create_backend(cfg: Config) -> KeyValueBackend:
    """Build the backend named by STORAGE_BACKEND."""
    if not cfg.validate_backend(cfg.STORAGE_BACKEND):
        raise ValueError(f"Unknown storage backend: {cfg.STORAGE_BACKEND}")

    if cfg.STORAGE_BACKEND == "redis":
        if not cfg.REDIS_URL:
            raise ValueError("DEVPALETTE_REDIS_URL is required for the redis backend")
        logger.info("Using redis persistence backend")
        return RedisBackend(cfg.REDIS_URL)

    if cfg.STORAGE_BACKEND == "file":
        logger.info(f"Using file persistence backend at {cfg.STORAGE_PATH}")
        return JsonFileBackend(cfg.STORAGE_PATH)

    logger.info("Using in-memory persistence backend")
    return InMemoryBackend()
