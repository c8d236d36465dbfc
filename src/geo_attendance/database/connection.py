from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling
from mysql.connector.errors import PoolError


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 10
    # Seconds a caller waits for a free pooled connection before giving up
    pool_timeout: float = 10.0


class DatabaseConnection:
    """Singleton-like factory handing out pooled connections.

    Note: Repositories borrow one connection per operation; closing it returns
    it to the bounded pool. When every connection is checked out, `connect`
    waits up to `pool_timeout` seconds for one to come back.
    """

    RETRY_INTERVAL = 0.05

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = DatabaseConnection(config)
            return cls._instance

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="geo_attendance",
                    pool_size=int(self._config.pool_size),
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                )
            return self._pool

    def connect(self):
        pool = self._get_pool()
        deadline = time.monotonic() + float(self._config.pool_timeout)
        while True:
            try:
                return pool.get_connection()
            except PoolError:
                # get_connection never blocks; it fails at once on an exhausted pool
                if time.monotonic() >= deadline:
                    raise
                time.sleep(self.RETRY_INTERVAL)
