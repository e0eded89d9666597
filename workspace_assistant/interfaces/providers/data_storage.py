from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple


class DataStorageProvider(ABC):
    """Interface for document storage providers."""

    @abstractmethod
    def create_collection(self, name: str) -> None:
        """Create a collection if it does not exist yet."""
        pass

    @abstractmethod
    def insert_one(self, collection: str, document: Dict) -> str:
        """Insert a document and return its id."""
        pass

    @abstractmethod
    def find_one(
        self, collection: str, query: Dict, sort: Optional[List[Tuple]] = None
    ) -> Optional[Dict]:
        """Find a single document."""
        pass

    @abstractmethod
    def find(
        self,
        collection: str,
        query: Dict,
        sort: Optional[List[Tuple]] = None,
        limit: int = 0,
    ) -> List[Dict]:
        """Find documents matching query."""
        pass

    @abstractmethod
    def update_one(
        self, collection: str, query: Dict, update: Dict, upsert: bool = False
    ) -> bool:
        """Update a single document."""
        pass

    @abstractmethod
    def update_many(self, collection: str, query: Dict, update: Dict) -> int:
        """Update all matching documents, returning how many changed."""
        pass

    @abstractmethod
    def find_one_and_update(
        self, collection: str, query: Dict, update: Dict, upsert: bool = False
    ) -> Optional[Dict]:
        """Atomically update a document and return the updated version."""
        pass

    @abstractmethod
    def create_index(self, collection: str, keys: List[Tuple], **kwargs) -> None:
        """Create an index."""
        pass
