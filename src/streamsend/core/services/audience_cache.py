"""Cache del audience "actual".

La cuenta expone sus audiences en `/audiences.xml`; todas las operaciones de
colección de subscribers cuelgan del primero. Se pide una vez y se memoriza
hasta `clear()`.

Concurrencia:
- Leer un valor ya cacheado no toma lock.
- Poblar el cache está serializado: hilos concurrentes disparan a lo sumo un
  fetch.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class AudienceCache:
    def __init__(self, loader: Callable[[], int]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._audience_id: int | None = None

    @property
    def cached(self) -> int | None:
        return self._audience_id

    def audience_id(self) -> int:
        value = self._audience_id
        if value is not None:
            return value

        with self._lock:
            if self._audience_id is None:
                self._audience_id = self._loader()
                logger.info("Cached current audience id %s", self._audience_id)
            return self._audience_id

    def clear(self) -> None:
        with self._lock:
            self._audience_id = None
