"""Base registry for managing runtime components with metadata."""
from typing import Dict, Generic, Set, TypeVar

from pydantic import BaseModel, Field, PrivateAttr

from ..common.types import OperationNotFoundError, RegistrationError

T = TypeVar('T')  # Type for registered items
M = TypeVar('M')  # Type for serializable metadata


class RegistryBase(BaseModel, Generic[T, M]):
    """Base registry for managing runtime components with metadata.

    Items are added during startup and the registry is then frozen, after
    which it is read-only for the life of the process.
    """
    metadata: Dict[str, M] = Field(default_factory=dict)
    _instances: Dict[str, T] = PrivateAttr(default_factory=dict)
    _categories: Dict[str, Set[str]] = PrivateAttr(default_factory=dict)
    _frozen: bool = PrivateAttr(default=False)

    def _validate_item(self, item_id: str, item: T) -> None:
        """Validate item before it is registered."""
        raise NotImplementedError("Subclasses must implement _validate_item")

    def _metadata_for(self, item_id: str, item: T) -> M:
        """Build the serializable metadata for an item."""
        raise NotImplementedError("Subclasses must implement _metadata_for")

    def _register(self, item_id: str, item: T, category: str) -> None:
        """Internal method to register an item."""
        if self._frozen:
            raise RegistrationError(f"Registry is frozen, cannot register: {item_id}")
        if item_id in self.metadata:
            raise RegistrationError(f"Item already registered: {item_id}")
        self._validate_item(item_id, item)
        self.metadata[item_id] = self._metadata_for(item_id, item)
        self._instances[item_id] = item
        self._categories.setdefault(category, set()).add(item_id)

    def freeze(self) -> None:
        """Mark the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get_item(self, item_id: str) -> T:
        """Get runtime instance by ID."""
        if item_id not in self._instances:
            raise OperationNotFoundError(f"Item not found: {item_id}")
        return self._instances[item_id]

    def list_items(self) -> list[str]:
        """Get list of registered IDs in registration order."""
        return list(self.metadata.keys())

    def has_item(self, item_id: str) -> bool:
        """Check if item exists."""
        return item_id in self.metadata

    def get_by_category(self, category: str) -> Dict[str, T]:
        """Get items by category."""
        ids = self._categories.get(category, set())
        return {id: self._instances[id] for id in self.list_items() if id in ids}

    def categories(self) -> list[str]:
        return sorted(self._categories)
