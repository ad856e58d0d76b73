import logging
import secrets
import string
from dataclasses import dataclass, field

import httpx

from clients.firestore_values import decode_fields, encode_fields, encode_value
from utils.config import (
    get_firebase_project_id,
    get_firestore_access_token,
    get_firestore_emulator_host,
    get_firestore_timeout,
)
from utils.constants import (
    AUTO_ID_LENGTH,
    FIRESTORE_BASE_URL,
    FIRESTORE_LIST_PAGE_SIZE,
    FIRESTORE_MAX_BATCH_WRITES,
    HTTP_STATUS_NOT_FOUND,
)

logger = logging.getLogger(__name__)

AUTO_ID_ALPHABET = string.ascii_letters + string.digits


class StoreError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None, response_text: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


@dataclass
class Document:
    name: str
    fields: dict = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.name.rsplit("/", 1)[-1]


def new_document_id() -> str:
    return "".join(secrets.choice(AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))


class FirestoreClient:
    """Async client for the Firestore REST API.

    Every method raises ``StoreError`` when the request fails, whether the
    server rejected it (permission, quota, precondition) or it never got a
    response. Use it as an async context manager so the underlying
    ``httpx.AsyncClient`` is closed.
    """

    def __init__(
        self,
        project_id: str,
        token: str | None = None,
        base_url: str = FIRESTORE_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.project_id = project_id
        self.database_path = f"projects/{project_id}/databases/(default)/documents"
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout if timeout is not None else get_firestore_timeout()),
            transport=transport,
        )

    @classmethod
    def from_env(cls, token: str | None = None, transport: httpx.AsyncBaseTransport | None = None) -> "FirestoreClient":
        emulator_host = get_firestore_emulator_host()
        if emulator_host:
            logger.info("Using Firestore emulator at %s", emulator_host)
            return cls(get_firebase_project_id(), token="owner", base_url=f"http://{emulator_host}/v1", transport=transport)
        return cls(get_firebase_project_id(), token=token or get_firestore_access_token(), transport=transport)

    async def __aenter__(self) -> "FirestoreClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def collection_path(self, collection: str) -> str:
        return f"{self.database_path}/{collection}"

    def document_path(self, collection: str, key: str) -> str:
        return f"{self.database_path}/{collection}/{key}"

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        allow_not_found: bool = False,
        **kwargs: object,
    ) -> httpx.Response | None:
        try:
            response = await self._client.request(method, url, **kwargs)
            if allow_not_found and response.status_code == HTTP_STATUS_NOT_FOUND:
                return None
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            error_msg = f"Firestore {operation} failed: {exc.response.status_code} - {exc.response.text}"
            logger.error(error_msg)
            raise StoreError(error_msg, status_code=exc.response.status_code, response_text=exc.response.text) from exc
        except httpx.HTTPError as exc:
            error_msg = f"Firestore {operation} failed: {type(exc).__name__}: {exc}"
            logger.error(error_msg)
            raise StoreError(error_msg) from exc
        return response

    @staticmethod
    def _to_document(raw: dict) -> Document:
        return Document(name=raw["name"], fields=decode_fields(raw.get("fields")))

    async def add_document(self, collection: str, record: dict) -> str:
        response = await self._request(
            "add_document", "POST", self.collection_path(collection), json={"fields": encode_fields(record)}
        )
        name = response.json()["name"]
        logger.debug("Added document %s", name)
        return name

    async def list_documents(self, collection: str) -> list[Document]:
        documents = []
        page_token = None

        while True:
            params = {"pageSize": FIRESTORE_LIST_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            response = await self._request("list_documents", "GET", self.collection_path(collection), params=params)
            payload = response.json()
            documents.extend(self._to_document(raw) for raw in payload.get("documents", []))
            page_token = payload.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Listed %s documents in %s", len(documents), collection)
        return documents

    async def delete_document(self, name: str) -> None:
        await self._request("delete_document", "DELETE", name)

    async def get_document(self, collection: str, key: str) -> Document | None:
        response = await self._request(
            "get_document", "GET", self.document_path(collection, key), allow_not_found=True
        )
        if response is None:
            return None
        return self._to_document(response.json())

    async def set_document(
        self,
        collection: str,
        key: str,
        record: dict,
        merge: bool = False,
        exists: bool | None = None,
    ) -> None:
        # Without an update mask Firestore replaces the whole document
        params = []
        if merge:
            params.extend(("updateMask.fieldPaths", path) for path in record)
        if exists is not None:
            params.append(("currentDocument.exists", "true" if exists else "false"))

        await self._request(
            "set_document",
            "PATCH",
            self.document_path(collection, key),
            params=params,
            json={"fields": encode_fields(record)},
        )

    def create_write(self, collection: str, record: dict) -> dict:
        return {
            "update": {"name": self.document_path(collection, new_document_id()), "fields": encode_fields(record)},
            "currentDocument": {"exists": False},
        }

    def delete_write(self, name: str) -> dict:
        return {"delete": name}

    async def commit(self, writes: list[dict]) -> None:
        if len(writes) > FIRESTORE_MAX_BATCH_WRITES:
            raise ValueError(f"A commit takes at most {FIRESTORE_MAX_BATCH_WRITES} writes, got {len(writes)}")
        if not writes:
            return
        await self._request("commit", "POST", f"{self.database_path}:commit", json={"writes": writes})

    async def run_query(self, collection: str, field_path: str, op: str, value: object) -> list[Document]:
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": field_path},
                        "op": op,
                        "value": encode_value(value),
                    }
                },
            }
        }
        response = await self._request("run_query", "POST", f"{self.database_path}:runQuery", json=body)
        return [self._to_document(item["document"]) for item in response.json() if "document" in item]
