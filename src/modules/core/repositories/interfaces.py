"""Generic repository interface (Dependency Inversion Principle).

Provides ``IReadRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Only reads are generic: each aggregate declares its own write
operations, because their atomicity rules differ.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class IReadRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Order``).
    """

    @abstractmethod
    def get_by_id(self, id: UUID) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self) -> List[T]:
        """List every entity in the repository's default order."""
