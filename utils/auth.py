import hmac
import os

import sentry_sdk
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from utils.constants import HTTP_STATUS_UNAUTHORIZED


def get_admin_panel_token() -> str:
    return os.getenv("ADMIN_PANEL_TOKEN", "")


def is_valid_panel_token(credentials: HTTPAuthorizationCredentials, expected_token: str) -> bool:
    if not expected_token or credentials.scheme.lower() != "bearer":
        return False
    return hmac.compare_digest(credentials.credentials.encode(), expected_token.encode())


def get_validated_token(credentials: HTTPAuthorizationCredentials) -> None:
    """Rejects panel requests whose bearer token is not ADMIN_PANEL_TOKEN.

    An unset ADMIN_PANEL_TOKEN locks the panel.
    """
    if is_valid_panel_token(credentials, get_admin_panel_token()):
        return

    with sentry_sdk.push_scope() as scope:
        scope.set_tag("component", "admin_panel_auth")
        scope.set_extra("provided_scheme", credentials.scheme)
        scope.set_extra("provided_token", credentials.credentials[:4] + "***")
        sentry_sdk.capture_message("Rejected admin panel token", level="warning")

    raise HTTPException(status_code=HTTP_STATUS_UNAUTHORIZED, detail="Unauthorized")
