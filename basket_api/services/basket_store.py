"""
In-memory basket store for the Shopping Basket API.

Thread-safe, basket-scoped storage of live baskets.

Key Features:
- Get-or-create: the first reference to an unseen id creates the basket,
  and concurrent first references all observe the same instance
- Per-basket locking: read-modify-write sequences on one basket are
  serialized without blocking work on other baskets
- Process lifetime only: baskets are never evicted or persisted
"""

import threading
import time
import logging
from contextlib import contextmanager
from typing import Dict, Iterator

from ..domain.models import Basket

logger = logging.getLogger(__name__)


class BasketStore:
    """
    Thread-safe keyed map of baskets.

    The global lock guards the basket map and the lock map. Each basket
    has its own RLock that callers hold while mutating it.
    """

    def __init__(self):
        self._baskets: Dict[str, Basket] = {}  # basket_id -> Basket
        self._locks_by_basket: Dict[str, threading.RLock] = {}  # basket_id -> threading.RLock()
        self._global_lock = threading.RLock()
        self._creation_time = time.time()

        # Statistics for monitoring
        self._stats = {
            'baskets_created': 0,
            'total_operations': 0
        }

        logger.info("BasketStore initialized")

    def _get_basket_lock(self, basket_id: str) -> threading.RLock:
        """Get or create a lock for a specific basket."""
        with self._global_lock:
            if basket_id not in self._locks_by_basket:
                self._locks_by_basket[basket_id] = threading.RLock()
                logger.debug(f"Created new lock for basket {basket_id}")
            return self._locks_by_basket[basket_id]

    def get_or_create(self, basket_id: str) -> Basket:
        """
        Return the basket for `basket_id`, creating an empty one if it is unseen.

        The check and the insert happen under one lock acquisition, so two
        threads asking for the same new id get the same Basket.

        Args:
            basket_id: Opaque basket identifier

        Returns:
            Basket: The live (shared) basket instance
        """
        with self._global_lock:
            basket = self._baskets.get(basket_id)
            if basket is None:
                basket = Basket(id=basket_id)
                self._baskets[basket_id] = basket
                self._stats['baskets_created'] += 1
                logger.info(f"Created basket {basket_id}")
            self._stats['total_operations'] += 1
            return basket

    @contextmanager
    def locked(self, basket_id: str) -> Iterator[Basket]:
        """
        Resolve a basket and hold its lock for the duration of the block.

        Usage:
            with store.locked(basket_id) as basket:
                basket.add_item(item)
        """
        lock = self._get_basket_lock(basket_id)
        with lock:
            yield self.get_or_create(basket_id)

    def get_stats(self) -> dict:
        """
        Get store statistics for monitoring.

        Returns:
            dict: Statistics about the store
        """
        with self._global_lock:
            return {
                **self._stats,
                'live_baskets': len(self._baskets),
                'uptime_seconds': time.time() - self._creation_time
            }

    def __contains__(self, basket_id: object) -> bool:
        with self._global_lock:
            return basket_id in self._baskets

    def __len__(self) -> int:
        with self._global_lock:
            return len(self._baskets)
