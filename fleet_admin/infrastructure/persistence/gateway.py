"""
Gateway to the backend persistence API.

This module defines the abstract interface every persist call goes through,
plus the demo implementation that simulates network latency and occasional
server-side rejections.
"""

import asyncio
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from fleet_admin.core.config import PersistenceSettings
from fleet_admin.core.exceptions import PersistenceError
from fleet_admin.core.logging import get_logger

logger = get_logger(__name__)


class PersistGateway(ABC):
    """
    Abstract persistence backend.

    Callers only rely on the success/failure contract: ``persist`` either
    returns normally or raises ``PersistenceError``.
    """

    @abstractmethod
    async def persist(self, operation: str, payload: Optional[Dict[str, Any]] = None) -> None:
        """
        Send a change to the backend.

        Args:
            operation: Operation name such as ``update_part``
            payload: Serialized change set

        Raises:
            PersistenceError: If the backend rejects the change
        """
        pass


class SimulatedPersistGateway(PersistGateway):
    """Demo backend: waits ``delay_seconds`` then fails with probability ``failure_rate``."""

    def __init__(self, delay_seconds: float = 1.0, failure_rate: float = 0.1, seed: Optional[int] = None):
        if not 0 <= failure_rate <= 1:
            raise ValueError("failure_rate must be between 0 and 1")
        self.delay_seconds = delay_seconds
        self.failure_rate = failure_rate
        self._random = random.Random(seed)

    @classmethod
    def from_settings(cls, settings: PersistenceSettings) -> "SimulatedPersistGateway":
        return cls(
            delay_seconds=settings.delay_seconds,
            failure_rate=settings.failure_rate,
            seed=settings.seed,
        )

    async def persist(self, operation: str, payload: Optional[Dict[str, Any]] = None) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if self._random.random() < self.failure_rate:
            logger.warning(f"Simulated backend rejected {operation}")
            raise PersistenceError(operation=operation)

        logger.debug(f"Persisted {operation}")
