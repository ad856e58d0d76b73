from unittest.mock import MagicMock, patch

import pytest
from seeding.sample_jobs import SAMPLE_JOBS
from seeding.service import clear_jobs, commit_in_chunks, seed_jobs
from utils.constants import JOBS_COLLECTION, SEED_MARKER_FIELD, WRITE_MODE_BATCH, WRITE_MODE_CONCURRENT

WRITE_MODES = [WRITE_MODE_BATCH, WRITE_MODE_CONCURRENT]


@pytest.mark.asyncio
@pytest.mark.parametrize("write_mode", WRITE_MODES)
async def test_seed_jobs_into_empty_collection(store, write_mode: str) -> None:
    result = await seed_jobs(store, clear_first=False, write_mode=write_mode)

    assert result.to_dict() == {"success": True, "count": 12}
    assert len(store.docs(JOBS_COLLECTION)) == len(SAMPLE_JOBS) == 12
    titles = sorted(doc["title"] for doc in store.docs(JOBS_COLLECTION).values())
    assert titles == sorted(job["title"] for job in SAMPLE_JOBS)
    assert all(doc[SEED_MARKER_FIELD] is True for doc in store.docs(JOBS_COLLECTION).values())


@pytest.mark.asyncio
@pytest.mark.parametrize("write_mode", WRITE_MODES)
async def test_seed_without_clear_appends_to_existing_jobs(store, write_mode: str) -> None:
    store.put(JOBS_COLLECTION, "real-job", {"title": "Data Analyst"})

    result = await seed_jobs(store, write_mode=write_mode)

    assert result.success is True
    assert len(store.docs(JOBS_COLLECTION)) == 13


@pytest.mark.asyncio
@pytest.mark.parametrize("write_mode", WRITE_MODES)
async def test_reseed_ends_with_exactly_the_sample_set(store, write_mode: str) -> None:
    for idx in range(30):
        store.put(JOBS_COLLECTION, f"old-{idx}", {"title": f"Old job {idx}"})
    await seed_jobs(store, write_mode=write_mode)

    result = await seed_jobs(store, clear_first=True, write_mode=write_mode)

    assert result.to_dict() == {"success": True, "count": 12}
    assert len(store.docs(JOBS_COLLECTION)) == 12


@pytest.mark.asyncio
async def test_failed_clear_stops_seeding(store) -> None:
    store.put(JOBS_COLLECTION, "real-job", {"title": "Data Analyst"})
    store.fail_list = True

    result = await seed_jobs(store, clear_first=True, write_mode=WRITE_MODE_CONCURRENT)

    assert result.success is False
    assert "insufficient permissions" in result.error
    assert store.write_count == 0
    assert store.add_calls == 0


@pytest.mark.asyncio
async def test_concurrent_seed_partial_failure_is_reported_not_rolled_back(store) -> None:
    store.fail_add_on_call = 5

    result = await seed_jobs(store, write_mode=WRITE_MODE_CONCURRENT)

    assert result.success is False
    assert result.error == "Firestore add_document failed: 429 - Quota exceeded"
    assert len(result.created) == 11
    assert len(store.docs(JOBS_COLLECTION)) == 11
    assert result.to_dict()["created"] == result.created


@pytest.mark.asyncio
async def test_batch_seed_failure_writes_nothing(store) -> None:
    store.fail_commit = True

    result = await seed_jobs(store, write_mode=WRITE_MODE_BATCH)

    assert result.to_dict() == {"success": False, "error": "Firestore commit failed: 403 - Missing or insufficient permissions."}
    assert store.docs(JOBS_COLLECTION) == {}


@pytest.mark.asyncio
@patch("seeding.service.sentry_sdk.capture_message")
@patch("seeding.service.sentry_sdk.push_scope")
async def test_seed_reports_summary_to_sentry(
    mock_push_scope: MagicMock,
    mock_capture_message: MagicMock,
    store,
) -> None:
    mock_scope = MagicMock()
    mock_push_scope.return_value.__enter__.return_value = mock_scope

    await seed_jobs(store, write_mode=WRITE_MODE_BATCH)

    mock_scope.set_tag.assert_any_call("component", "seed_jobs")
    mock_scope.set_extra.assert_any_call("jobs_seeded", 12)
    mock_scope.set_extra.assert_any_call(
        "job_types", {"Full-time": 6, "Part-time": 2, "Internship": 2, "Freelance": 2}
    )
    mock_scope.set_extra.assert_any_call("locations", {"Dhaka": 8, "Remote": 3, "Other": 1})
    mock_capture_message.assert_called_once_with("Job seeding completed", level="info")


@pytest.mark.asyncio
@patch("seeding.service.sentry_sdk.capture_message")
async def test_failed_seed_does_not_log_summary(mock_capture_message: MagicMock, store) -> None:
    store.fail_commit = True

    await seed_jobs(store, write_mode=WRITE_MODE_BATCH)

    mock_capture_message.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("write_mode", WRITE_MODES)
async def test_clear_removes_every_document(store, write_mode: str) -> None:
    await seed_jobs(store, write_mode=write_mode)
    store.put(JOBS_COLLECTION, "real-job", {"title": "Data Analyst"})

    result = await clear_jobs(store, write_mode=write_mode)

    assert result.to_dict() == {"success": True, "count": 13}
    assert store.docs(JOBS_COLLECTION) == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("write_mode", WRITE_MODES)
async def test_clear_empty_collection_is_successful_noop(store, write_mode: str) -> None:
    result = await clear_jobs(store, write_mode=write_mode)

    assert result.to_dict() == {"success": True, "count": 0}
    assert store.write_count == 0


@pytest.mark.asyncio
async def test_clear_seeded_only_keeps_real_jobs(store) -> None:
    await seed_jobs(store, write_mode=WRITE_MODE_BATCH)
    store.put(JOBS_COLLECTION, "real-job", {"title": "Data Analyst"})

    result = await clear_jobs(store, seeded_only=True, write_mode=WRITE_MODE_BATCH)

    assert result.count == 12
    assert list(store.docs(JOBS_COLLECTION)) == ["real-job"]


@pytest.mark.asyncio
async def test_clear_failure_returns_error_result(store) -> None:
    store.put(JOBS_COLLECTION, "real-job", {"title": "Data Analyst"})
    store.fail_delete = True

    result = await clear_jobs(store, write_mode=WRITE_MODE_CONCURRENT)

    assert result.success is False
    assert result.error == "Firestore delete_document failed: 503 - Service unavailable"
    assert "real-job" in store.docs(JOBS_COLLECTION)


@pytest.mark.asyncio
async def test_seed_uses_configured_write_mode(store, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEED_WRITE_MODE", WRITE_MODE_CONCURRENT)

    await seed_jobs(store)

    assert store.add_calls == 12


@pytest.mark.asyncio
async def test_commit_in_chunks_keeps_track_of_chunks_committed_before_a_failure(store) -> None:
    writes = [store.create_write(JOBS_COLLECTION, {"title": f"Job {i}"}) for i in range(3)]
    commits = []
    commit = store.commit

    async def fail_second_chunk(chunk: list[dict]) -> None:
        commits.append(len(chunk))
        if len(commits) == 2:
            raise RuntimeError("Firestore commit failed: 503 - Service unavailable")
        await commit(chunk)

    store.commit = fail_second_chunk
    committed = []

    with patch("seeding.service.FIRESTORE_MAX_BATCH_WRITES", 2):
        with pytest.raises(RuntimeError):
            await commit_in_chunks(store, writes, committed)

    assert commits == [2, 1]
    assert committed == writes[:2]
    assert len(store.docs(JOBS_COLLECTION)) == 2


@pytest.mark.asyncio
async def test_batch_seed_reports_jobs_left_by_an_earlier_chunk(store) -> None:
    commit = store.commit
    calls = []

    async def fail_second_chunk(chunk: list[dict]) -> None:
        calls.append(chunk)
        if len(calls) == 2:
            raise RuntimeError("Firestore commit failed: 503 - Service unavailable")
        await commit(chunk)

    store.commit = fail_second_chunk

    with patch("seeding.service.FIRESTORE_MAX_BATCH_WRITES", 5):
        result = await seed_jobs(store, write_mode=WRITE_MODE_BATCH)

    assert result.success is False
    assert result.created == [write["update"]["name"] for write in calls[0]]
    assert len(result.created) == 5
    assert len(store.docs(JOBS_COLLECTION)) == 5
