import logging
from dataclasses import dataclass

import httpx

from utils.config import get_auth_emulator_host, get_firebase_api_key, get_firestore_timeout
from utils.constants import FIREBASE_AUTH_BASE_URL

logger = logging.getLogger(__name__)


class AuthError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class Session:
    uid: str
    email: str | None
    id_token: str | None = None


def get_auth_base_url() -> str:
    emulator_host = get_auth_emulator_host()
    if emulator_host:
        return f"http://{emulator_host}/identitytoolkit.googleapis.com/v1"
    return FIREBASE_AUTH_BASE_URL


class AuthClient:
    """Resolves Firebase Auth sessions through the Identity Toolkit REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else get_firebase_api_key()
        self.base_url = base_url or get_auth_base_url()
        self.transport = transport

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint}"

    async def _post(self, endpoint: str, payload: dict) -> dict:
        if not self.api_key:
            raise AuthError("Missing FIREBASE_API_KEY environment variable")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(get_firestore_timeout()),
                transport=self.transport,
            ) as client:
                # "accounts:" would parse as a URL scheme if passed as a relative path
                response = await client.post(self.endpoint_url(endpoint), params={"key": self.api_key}, json=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            error_msg = f"Firebase Auth {endpoint} failed: {exc.response.status_code} - {exc.response.text}"
            logger.error(error_msg)
            raise AuthError(error_msg, status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            error_msg = f"Firebase Auth {endpoint} failed: {type(exc).__name__}: {exc}"
            logger.error(error_msg)
            raise AuthError(error_msg) from exc

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        data = await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return Session(uid=data["localId"], email=data.get("email", email), id_token=data.get("idToken"))

    async def lookup(self, id_token: str) -> Session:
        data = await self._post("accounts:lookup", {"idToken": id_token})
        users = data.get("users") or []
        if not users:
            raise AuthError("No account found for the provided id token")
        return Session(uid=users[0]["localId"], email=users[0].get("email"), id_token=id_token)

    async def current_session(
        self,
        id_token: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> Session | None:
        if id_token:
            resolve = self.lookup(id_token)
        elif email and password:
            resolve = self.sign_in_with_password(email, password)
        else:
            logger.debug("No id token or credentials provided, no session")
            return None

        try:
            session = await resolve
        except AuthError as e:
            logger.warning("Could not resolve a session: %s", e)
            return None

        logger.info("Signed in as %s", session.email)
        return session
