import logging

import sentry_sdk

from clients.auth_client import Session
from clients.firestore_client import Document
from utils.config import get_admin_bootstrap_emails
from utils.constants import (
    ADMIN_ROLES,
    ALLOWED_ROLES,
    FORBIDDEN,
    INVALID_ROLE,
    NO_SESSION,
    NOT_FOUND,
    ROLE_SUPER_ADMIN,
    ROLE_USER,
    STORE_ERROR,
    UPDATED,
    USERS_COLLECTION,
)
from utils.results import RoleResult
from utils.utils import normalize_email, utc_now_iso

logger = logging.getLogger(__name__)


def role_of(profile: Document | None) -> str:
    if profile is None:
        return ROLE_USER
    return profile.fields.get("role") or ROLE_USER


def is_bootstrap_admin(session: Session, bootstrap_emails: set[str] | None = None) -> bool:
    if bootstrap_emails is None:
        bootstrap_emails = get_admin_bootstrap_emails()
    email = normalize_email(session.email)
    return bool(email) and email in bootstrap_emails


def has_super_admin_access(session: Session, profile: Document | None, bootstrap_emails: set[str] | None = None) -> bool:
    return is_bootstrap_admin(session, bootstrap_emails) or role_of(profile) == ROLE_SUPER_ADMIN


def has_admin_access(session: Session, profile: Document | None, bootstrap_emails: set[str] | None = None) -> bool:
    return is_bootstrap_admin(session, bootstrap_emails) or role_of(profile) in ADMIN_ROLES


async def get_user_role(store, uid: str) -> str:
    profile = await store.get_document(USERS_COLLECTION, uid)
    return role_of(profile)


async def is_admin(store, session: Session | None, bootstrap_emails: set[str] | None = None) -> bool:
    if session is None:
        return False
    profile = await store.get_document(USERS_COLLECTION, session.uid)
    return has_admin_access(session, profile, bootstrap_emails)


async def is_super_admin(store, session: Session | None, bootstrap_emails: set[str] | None = None) -> bool:
    if session is None:
        return False
    profile = await store.get_document(USERS_COLLECTION, session.uid)
    return has_super_admin_access(session, profile, bootstrap_emails)


async def set_user_role(
    store,
    session: Session | None,
    uid: str,
    new_role: str,
    bootstrap_emails: set[str] | None = None,
) -> RoleResult:
    """Sets another user's role. Only super admins may do this.

    The target profile must already exist; ``role``, ``roleUpdatedAt`` and
    ``roleUpdatedBy`` are merged into it.
    """
    if session is None:
        return RoleResult(success=False, kind=NO_SESSION, message="No user is logged in")

    if new_role not in ALLOWED_ROLES:
        return RoleResult(
            success=False,
            kind=INVALID_ROLE,
            message=f"Invalid role {new_role!r}, expected one of {sorted(ALLOWED_ROLES)}",
            uid=uid,
        )

    try:
        if not await is_super_admin(store, session, bootstrap_emails):
            logger.warning("%s tried to change the role of %s without super admin access", session.email, uid)
            return RoleResult(
                success=False, kind=FORBIDDEN, message="Only Super Admins can modify user roles", uid=uid
            )

        await store.set_document(
            USERS_COLLECTION,
            uid,
            {"role": new_role, "roleUpdatedAt": utc_now_iso(), "roleUpdatedBy": session.uid},
            merge=True,
            exists=True,
        )
    except Exception as e:
        logger.exception("Error setting role of user %s", uid)
        with sentry_sdk.push_scope() as scope:
            scope.set_tag("component", "set_user_role")
            scope.set_extra("uid", uid)
            scope.set_extra("new_role", new_role)
            sentry_sdk.capture_exception(e)
        return RoleResult(success=False, kind=STORE_ERROR, message=str(e), uid=uid)

    logger.info("User %s role updated to %s", uid, new_role)
    return RoleResult(success=True, kind=UPDATED, message=f"User {uid} role updated to {new_role}", uid=uid)


async def promote_user_by_email(
    store,
    session: Session | None,
    email: str,
    bootstrap_emails: set[str] | None = None,
) -> RoleResult:
    """Makes the user stored under ``email`` a super admin. Only super admins may do this."""
    if session is None:
        return RoleResult(success=False, kind=NO_SESSION, message="No user is logged in")

    try:
        if not await is_super_admin(store, session, bootstrap_emails):
            logger.warning("%s tried to promote %s without super admin access", session.email, email)
            return RoleResult(success=False, kind=FORBIDDEN, message="Only Super Admins can create Super Admins")

        matches = await store.run_query(USERS_COLLECTION, "email", "EQUAL", email)
        if not matches:
            logger.error("User not found with this email: %s", email)
            return RoleResult(success=False, kind=NOT_FOUND, message="User not found with this email")

        uid = matches[0].id
        await store.set_document(
            USERS_COLLECTION,
            uid,
            {"role": ROLE_SUPER_ADMIN, "roleUpdatedAt": utc_now_iso()},
            merge=True,
            exists=True,
        )
    except Exception as e:
        logger.exception("Error promoting %s to Super Admin", email)
        with sentry_sdk.push_scope() as scope:
            scope.set_tag("component", "promote_user_by_email")
            scope.set_extra("email", email)
            sentry_sdk.capture_exception(e)
        return RoleResult(success=False, kind=STORE_ERROR, message=str(e))

    logger.info("%s is now a Super Admin", email)
    return RoleResult(success=True, kind=UPDATED, message=f"{email} is now a Super Admin", uid=uid)


async def list_admins(store) -> list[dict]:
    documents = await store.run_query(USERS_COLLECTION, "role", "IN", ADMIN_ROLES)
    return [{"id": doc.id, **doc.fields} for doc in documents]
