import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from clients.firestore_client import FirestoreClient
from logging_config import setup_logging
from seeding.sample_jobs import SAMPLE_JOBS
from seeding.service import clear_jobs, seed_jobs
from seeding.stats import summarize_jobs
from utils.auth import get_validated_token
from utils.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_INTERNAL_ERROR,
    HTTP_STATUS_OK,
)
from utils.results import SeedResult
from utils.sentry import init_sentry

setup_logging()
init_sentry()
logger = logging.getLogger(__name__)

app = FastAPI(title="PathX admin panel")
security = HTTPBearer()

# One panel action at a time per process
panel_lock = asyncio.Lock()


async def get_store() -> AsyncIterator[FirestoreClient]:
    async with FirestoreClient.from_env() as store:
        yield store


def authorize(credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)]) -> None:
    get_validated_token(credentials)


def busy_response() -> JSONResponse:
    return JSONResponse(
        content={"success": False, "message": "Another admin action is still running"},
        status_code=HTTP_STATUS_CONFLICT,
    )


def seed_response(result: SeedResult) -> JSONResponse:
    if result.success:
        return JSONResponse(
            content={"success": True, "count": result.count, "message": f"Successfully seeded {result.count} jobs!"},
            status_code=HTTP_STATUS_OK,
        )
    content = {"success": False, "message": f"Error: {result.error}"}
    if result.created:
        content["created"] = result.created
    return JSONResponse(content=content, status_code=HTTP_STATUS_INTERNAL_ERROR)


async def run_seed(store: FirestoreClient, clear_first: bool) -> JSONResponse:
    if panel_lock.locked():
        return busy_response()
    async with panel_lock:
        result = await seed_jobs(store, clear_first=clear_first)
    return seed_response(result)


@app.get("/")
def root() -> dict:
    return {"message": "PathX admin panel is running!"}


@app.get("/jobs/sample", dependencies=[Depends(authorize)])
def sample_jobs() -> dict:
    return {"jobs": SAMPLE_JOBS, "count": len(SAMPLE_JOBS), "summary": summarize_jobs(SAMPLE_JOBS)}


@app.post("/jobs/seed", dependencies=[Depends(authorize)])
async def seed(store: Annotated[FirestoreClient, Depends(get_store)]) -> JSONResponse:
    return await run_seed(store, clear_first=False)


@app.post("/jobs/reseed", dependencies=[Depends(authorize)])
async def reseed(store: Annotated[FirestoreClient, Depends(get_store)]) -> JSONResponse:
    return await run_seed(store, clear_first=True)


@app.delete("/jobs", dependencies=[Depends(authorize)])
async def clear(
    store: Annotated[FirestoreClient, Depends(get_store)],
    confirm: bool = False,
    seeded_only: bool = False,
) -> JSONResponse:
    if not confirm:
        scope = "all seeded jobs" if seeded_only else "ALL jobs"
        return JSONResponse(
            content={"success": False, "message": f"Pass confirm=true to delete {scope} from Firestore"},
            status_code=HTTP_STATUS_BAD_REQUEST,
        )

    if panel_lock.locked():
        return busy_response()
    async with panel_lock:
        result = await clear_jobs(store, seeded_only=seeded_only)

    if not result.success:
        return JSONResponse(
            content={"success": False, "message": f"Error: {result.error}"},
            status_code=HTTP_STATUS_INTERNAL_ERROR,
        )
    return JSONResponse(
        content={"success": True, "count": result.count, "message": f"Cleared {result.count} jobs!"},
        status_code=HTTP_STATUS_OK,
    )
