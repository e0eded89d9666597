"""
MongoDB adapter for the Workspace Assistant.

This adapter implements the DataStorageProvider interface for MongoDB.
"""
import uuid
from typing import Dict, List, Optional, Tuple

from pymongo import MongoClient, ReturnDocument

from workspace_assistant.interfaces.providers.data_storage import DataStorageProvider


class MongoDBAdapter(DataStorageProvider):
    """MongoDB implementation of DataStorageProvider."""

    def __init__(self, connection_string: str, database_name: str):
        self.client = MongoClient(connection_string)
        self.db = self.client[database_name]

    def create_collection(self, name: str) -> None:
        if name not in self.db.list_collection_names():
            self.db.create_collection(name)

    def insert_one(self, collection: str, document: Dict) -> str:
        if "_id" not in document:
            document["_id"] = str(uuid.uuid4())
        self.db[collection].insert_one(document)
        return document["_id"]

    def find_one(
        self, collection: str, query: Dict, sort: Optional[List[Tuple]] = None
    ) -> Optional[Dict]:
        return self.db[collection].find_one(query, sort=sort)

    def find(
        self,
        collection: str,
        query: Dict,
        sort: Optional[List[Tuple]] = None,
        limit: int = 0,
    ) -> List[Dict]:
        cursor = self.db[collection].find(query)
        if sort:
            cursor = cursor.sort(sort)
        if limit > 0:
            cursor = cursor.limit(limit)
        return list(cursor)

    def update_one(
        self, collection: str, query: Dict, update: Dict, upsert: bool = False
    ) -> bool:
        result = self.db[collection].update_one(query, update, upsert=upsert)
        return result.modified_count > 0 or (upsert and result.upserted_id is not None)

    def update_many(self, collection: str, query: Dict, update: Dict) -> int:
        result = self.db[collection].update_many(query, update)
        return result.modified_count

    def find_one_and_update(
        self, collection: str, query: Dict, update: Dict, upsert: bool = False
    ) -> Optional[Dict]:
        return self.db[collection].find_one_and_update(
            query, update, upsert=upsert, return_document=ReturnDocument.AFTER
        )

    def create_index(self, collection: str, keys: List[Tuple], **kwargs) -> None:
        self.db[collection].create_index(keys, **kwargs)
