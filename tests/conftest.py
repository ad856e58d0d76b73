import asyncio
import copy
from collections import defaultdict

import pytest
from clients.firestore_client import Document, StoreError, new_document_id

DATABASE_PATH = "projects/test-project/databases/(default)/documents"


class InMemoryStore:
    """Stands in for FirestoreClient, keeping collections in dicts.

    The ``fail_*`` attributes inject store rejections; ``write_count`` counts
    every applied mutation so tests can assert that nothing was written.
    """

    def __init__(self) -> None:
        self.collections = defaultdict(dict)
        self.write_count = 0
        self.add_calls = 0
        self.fail_add_on_call = None
        self.fail_commit = False
        self.fail_list = False
        self.fail_delete = False
        self.fail_get = False
        self.fail_set = False

    async def __aenter__(self) -> "InMemoryStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    def document_path(self, collection: str, key: str) -> str:
        return f"{DATABASE_PATH}/{collection}/{key}"

    @staticmethod
    def _split(name: str) -> tuple[str, str]:
        collection, key = name.split("/documents/", 1)[1].split("/", 1)
        return collection, key

    def docs(self, collection: str) -> dict:
        return self.collections[collection]

    def put(self, collection: str, key: str, fields: dict) -> None:
        self.collections[collection][key] = copy.deepcopy(fields)

    async def add_document(self, collection: str, record: dict) -> str:
        self.add_calls += 1
        call = self.add_calls
        await asyncio.sleep(0)
        if self.fail_add_on_call == call:
            raise StoreError("Firestore add_document failed: 429 - Quota exceeded", status_code=429)
        key = new_document_id()
        self.put(collection, key, record)
        self.write_count += 1
        return self.document_path(collection, key)

    async def list_documents(self, collection: str) -> list[Document]:
        if self.fail_list:
            raise StoreError("Firestore list_documents failed: 403 - Missing or insufficient permissions.", 403)
        return [
            Document(name=self.document_path(collection, key), fields=copy.deepcopy(fields))
            for key, fields in self.collections[collection].items()
        ]

    async def delete_document(self, name: str) -> None:
        await asyncio.sleep(0)
        if self.fail_delete:
            raise StoreError("Firestore delete_document failed: 503 - Service unavailable", 503)
        collection, key = self._split(name)
        self.collections[collection].pop(key, None)
        self.write_count += 1

    async def get_document(self, collection: str, key: str) -> Document | None:
        if self.fail_get:
            raise StoreError("Firestore get_document failed: 503 - Service unavailable", 503)
        fields = self.collections[collection].get(key)
        if fields is None:
            return None
        return Document(name=self.document_path(collection, key), fields=copy.deepcopy(fields))

    async def set_document(
        self,
        collection: str,
        key: str,
        record: dict,
        merge: bool = False,
        exists: bool | None = None,
    ) -> None:
        if self.fail_set:
            raise StoreError("Firestore set_document failed: 403 - Missing or insufficient permissions.", 403)
        current = self.collections[collection].get(key)
        if exists is True and current is None:
            raise StoreError("Firestore set_document failed: 404 - No document to update", 404)
        if exists is False and current is not None:
            raise StoreError("Firestore set_document failed: 409 - Document already exists", 409)
        if merge and current is not None:
            self.collections[collection][key] = {**current, **copy.deepcopy(record)}
        else:
            self.put(collection, key, record)
        self.write_count += 1

    def create_write(self, collection: str, record: dict) -> dict:
        return {
            "update": {"name": self.document_path(collection, new_document_id()), "fields": copy.deepcopy(record)},
            "currentDocument": {"exists": False},
        }

    def delete_write(self, name: str) -> dict:
        return {"delete": name}

    async def commit(self, writes: list[dict]) -> None:
        if self.fail_commit:
            raise StoreError("Firestore commit failed: 403 - Missing or insufficient permissions.", 403)
        for write in writes:
            if "update" in write:
                collection, key = self._split(write["update"]["name"])
                self.put(collection, key, write["update"]["fields"])
            else:
                collection, key = self._split(write["delete"])
                self.collections[collection].pop(key, None)
            self.write_count += 1

    async def run_query(self, collection: str, field_path: str, op: str, value: object) -> list[Document]:
        matches = []
        for key, fields in self.collections[collection].items():
            field_value = fields.get(field_path)
            if (op == "IN" and field_value in value) or (op == "EQUAL" and field_value == value):
                matches.append(Document(name=self.document_path(collection, key), fields=copy.deepcopy(fields)))
        return matches


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()
