import asyncio
import logging

import sentry_sdk

from seeding.sample_jobs import build_seed_records
from seeding.stats import summarize_jobs
from utils.config import get_seed_write_mode
from utils.constants import (
    FIRESTORE_MAX_BATCH_WRITES,
    JOBS_COLLECTION,
    SEED_MARKER_FIELD,
    WRITE_MODE_BATCH,
    WRITE_MODE_CONCURRENT,
)
from utils.results import ClearResult, SeedResult
from utils.utils import chunked

logger = logging.getLogger(__name__)


def raise_if_fatal(outcomes: list) -> None:
    for outcome in outcomes:
        if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
            raise outcome


async def commit_in_chunks(store, writes: list[dict], committed: list[dict] | None = None) -> int:
    """Commits writes atomically per chunk, returning how many were committed.

    Each chunk is all-or-nothing. When a later chunk fails the earlier ones
    stay committed, which only happens past FIRESTORE_MAX_BATCH_WRITES.
    Committed writes are appended to ``committed`` so callers can still see
    them after a later chunk raises.
    """
    count = 0
    for chunk in chunked(writes, FIRESTORE_MAX_BATCH_WRITES):
        await store.commit(chunk)
        count += len(chunk)
        if committed is not None:
            committed.extend(chunk)
    return count


def log_seed_summary(records: list[dict]) -> None:
    summary = summarize_jobs(records)
    logger.info("Job types: %s", summary["job_types"])
    logger.info("Locations: %s", summary["locations"])

    with sentry_sdk.push_scope() as scope:
        scope.set_tag("component", "seed_jobs")
        scope.set_extra("jobs_seeded", len(records))
        scope.set_extra("job_types", summary["job_types"])
        scope.set_extra("locations", summary["locations"])
        sentry_sdk.capture_message("Job seeding completed", level="info")


async def clear_jobs(store, seeded_only: bool = False, write_mode: str | None = None) -> ClearResult:
    write_mode = write_mode or get_seed_write_mode()

    try:
        documents = await store.list_documents(JOBS_COLLECTION)
        if seeded_only:
            documents = [doc for doc in documents if doc.fields.get(SEED_MARKER_FIELD) is True]
        names = [doc.name for doc in documents]

        if write_mode == WRITE_MODE_BATCH:
            await commit_in_chunks(store, [store.delete_write(name) for name in names])
        else:
            outcomes = await asyncio.gather(*(store.delete_document(name) for name in names), return_exceptions=True)
            raise_if_fatal(outcomes)
            failures = [outcome for outcome in outcomes if isinstance(outcome, Exception)]
            if failures:
                logger.warning("%s of %s deletes failed", len(failures), len(names))
                raise failures[0]
    except Exception as e:
        logger.exception("Error clearing jobs")
        with sentry_sdk.push_scope() as scope:
            scope.set_tag("component", "clear_jobs")
            scope.set_extra("seeded_only", seeded_only)
            scope.set_extra("write_mode", write_mode)
            sentry_sdk.capture_exception(e)
        return ClearResult(success=False, error=str(e))

    logger.info("Cleared %s existing jobs", len(names))
    return ClearResult(success=True, count=len(names))


async def _seed_atomically(store, records: list[dict]) -> SeedResult:
    writes = [store.create_write(JOBS_COLLECTION, record) for record in records]
    committed = []
    try:
        count = await commit_in_chunks(store, writes, committed)
    except Exception as e:
        created = [write["update"]["name"] for write in committed]
        logger.exception("Error seeding jobs")
        if created:
            logger.warning("Seeding left %s jobs behind: %s", len(created), created)
        with sentry_sdk.push_scope() as scope:
            scope.set_tag("component", "seed_jobs")
            scope.set_extra("write_mode", WRITE_MODE_BATCH)
            scope.set_extra("jobs_committed", len(committed))
            sentry_sdk.capture_exception(e)
        return SeedResult(success=False, error=str(e), created=created)

    return SeedResult(success=True, count=count)


async def _seed_concurrently(store, records: list[dict]) -> SeedResult:
    outcomes = await asyncio.gather(
        *(store.add_document(JOBS_COLLECTION, record) for record in records),
        return_exceptions=True,
    )
    raise_if_fatal(outcomes)

    created = [outcome for outcome in outcomes if not isinstance(outcome, Exception)]
    failures = [outcome for outcome in outcomes if isinstance(outcome, Exception)]
    if not failures:
        return SeedResult(success=True, count=len(created))

    error = failures[0]
    logger.error("Error seeding jobs: %s (%s of %s inserts failed)", error, len(failures), len(records))
    if created:
        # Nothing is rolled back; these names are the cleanup log
        logger.warning("Seeding left %s jobs behind: %s", len(created), created)

    with sentry_sdk.push_scope() as scope:
        scope.set_tag("component", "seed_jobs")
        scope.set_extra("write_mode", WRITE_MODE_CONCURRENT)
        scope.set_extra("inserts_failed", len(failures))
        scope.set_extra("inserts_succeeded", len(created))
        sentry_sdk.capture_exception(error)

    return SeedResult(success=False, error=str(error), created=created)


async def seed_jobs(store, clear_first: bool = False, write_mode: str | None = None) -> SeedResult:
    write_mode = write_mode or get_seed_write_mode()
    logger.info("Starting to seed jobs (write mode: %s, clear first: %s)", write_mode, clear_first)

    if clear_first:
        clear_result = await clear_jobs(store, write_mode=write_mode)
        if not clear_result.success:
            logger.error("Clearing failed, jobs were not seeded")
            return SeedResult(success=False, error=clear_result.error)

    records = build_seed_records()
    if write_mode == WRITE_MODE_BATCH:
        result = await _seed_atomically(store, records)
    else:
        result = await _seed_concurrently(store, records)

    if result.success:
        logger.info("Successfully seeded %s jobs!", result.count)
        log_seed_summary(records)
    return result
