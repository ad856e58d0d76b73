import logging

import sentry_sdk

from admin.roles import has_super_admin_access
from clients.auth_client import Session
from utils.constants import (
    CREATED,
    FORBIDDEN,
    NO_SESSION,
    ROLE_SUPER_ADMIN,
    STORE_ERROR,
    UPDATED,
    USERS_COLLECTION,
)
from utils.results import RoleResult
from utils.utils import utc_now_iso

logger = logging.getLogger(__name__)

TROUBLESHOOTING_STEPS = [
    "Make sure you are logged in",
    "Check the Firebase connection and FIREBASE_PROJECT_ID",
    "Verify Firestore permissions for the users collection",
    "Check that your email is listed in ADMIN_BOOTSTRAP_EMAILS",
]


def log_troubleshooting() -> None:
    logger.info("Troubleshooting:")
    for step in TROUBLESHOOTING_STEPS:
        logger.info("- %s", step)


async def promote_current_user_to_super_admin(
    store,
    session: Session | None,
    bootstrap_emails: set[str] | None = None,
) -> RoleResult:
    """Creates or merges a super_admin role onto the signed-in user's profile.

    A missing profile is created with ``createdAt``; an existing one only
    gets ``role`` and ``roleUpdatedAt`` so every other stored field is kept.
    The caller must be a bootstrap admin or already a super admin.
    """
    if session is None:
        logger.error("No user is logged in. Please log in first, then run this command again.")
        return RoleResult(success=False, kind=NO_SESSION, message="No user is logged in")

    logger.info("Current user: %s", session.email)

    try:
        profile = await store.get_document(USERS_COLLECTION, session.uid)

        if not has_super_admin_access(session, profile, bootstrap_emails):
            logger.error("%s is not allowed to become a Super Admin", session.email)
            log_troubleshooting()
            return RoleResult(
                success=False,
                kind=FORBIDDEN,
                message=f"{session.email} is not authorized to become a Super Admin",
                uid=session.uid,
            )

        now = utc_now_iso()
        if profile is None:
            await store.set_document(
                USERS_COLLECTION,
                session.uid,
                {
                    "email": session.email,
                    "role": ROLE_SUPER_ADMIN,
                    "createdAt": now,
                    "roleUpdatedAt": now,
                },
                exists=False,
            )
            kind = CREATED
            logger.info("Created new user document with Super Admin role")
        else:
            await store.set_document(
                USERS_COLLECTION,
                session.uid,
                {"role": ROLE_SUPER_ADMIN, "roleUpdatedAt": now},
                merge=True,
                exists=True,
            )
            kind = UPDATED
            logger.info("Updated existing user to Super Admin role")

    except Exception as e:
        logger.exception("Admin setup failed")
        log_troubleshooting()
        with sentry_sdk.push_scope() as scope:
            scope.set_tag("component", "promote_current_user_to_super_admin")
            scope.set_extra("uid", session.uid)
            sentry_sdk.capture_exception(e)
        return RoleResult(success=False, kind=STORE_ERROR, message=str(e), uid=session.uid)

    logger.info("SUCCESS! %s is now a Super Admin. Sign in again to pick up the new role.", session.email)
    return RoleResult(
        success=True,
        kind=kind,
        message=f"{session.email} is now a Super Admin",
        uid=session.uid,
    )
