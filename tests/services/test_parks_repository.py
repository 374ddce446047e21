"""Parks Repository — tests for persistence, uniqueness and timestamps.

Tests cover:
    - create assigns id and timestamps, ignores caller-supplied managed columns
    - (name, state) uniqueness on create and update, self-update allowed
    - Storage-level backstop when the pre-check loses a race
    - get_by_id / update / delete on missing ids
    - search: case-insensitive substring over name and state, blank == get_all
    - created_at preserved and updated_at monotonic across updates
"""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from backoffice.core.errors import ConflictError, NotFoundError, StoreError
from backoffice.services.parks_repository import ParksRepository
from tests.services.factories import park_record


# ─── create ──────────────────────────────────────────────────────

async def test_create_assigns_id_and_timestamps(parks_repo):
    park = await parks_repo.create(park_record(
        established_date=date(1872, 3, 1), area=3471.2, latitude=44.428,
    ))
    assert park.id > 0
    assert park.created_at is not None
    assert park.updated_at == park.created_at
    assert park.established_date == date(1872, 3, 1)
    assert park.area == pytest.approx(3471.2)


async def test_create_ignores_managed_columns(parks_repo):
    park = await parks_repo.create(park_record(id=999, created_at="yesterday"))
    assert park.id != 999


async def test_duplicate_name_in_same_state_conflicts(parks_repo):
    await parks_repo.create(park_record())
    with pytest.raises(ConflictError) as exc_info:
        await parks_repo.create(park_record())
    assert exc_info.value.field == "name"
    assert exc_info.value.message == "A park with this name already exists in this state"
    assert await parks_repo.count() == 1


async def test_same_name_in_other_state_allowed(parks_repo):
    await parks_repo.create(park_record(name="Glacier", state="Montana"))
    await parks_repo.create(park_record(name="Glacier", state="Alaska"))
    assert await parks_repo.count() == 2


async def test_race_lost_to_concurrent_writer_is_conflict(parks_repo, monkeypatch):
    await parks_repo.create(park_record())

    original = parks_repo._find_conflict
    calls = []

    async def stale_precheck(values, exclude_id=None):
        calls.append(values)
        if len(calls) == 1:
            return None  # the other writer has not committed yet
        return await original(values, exclude_id)

    monkeypatch.setattr(parks_repo, "_find_conflict", stale_precheck)
    with pytest.raises(ConflictError) as exc_info:
        await parks_repo.create(park_record())
    assert exc_info.value.field == "name"
    assert await parks_repo.count() == 1


# ─── reads ───────────────────────────────────────────────────────

async def test_get_by_id_missing_raises(parks_repo):
    with pytest.raises(NotFoundError):
        await parks_repo.get_by_id(404)


async def test_get_all_in_creation_order(parks_repo):
    for name in ("Zion", "Acadia", "Denali"):
        await parks_repo.create(park_record(name=name))
    assert [p.name for p in await parks_repo.get_all()] == ["Zion", "Acadia", "Denali"]


async def test_search_is_case_insensitive_substring(parks_repo):
    await parks_repo.create(park_record(name="Yellowstone", state="Wyoming"))
    await parks_repo.create(park_record(name="Grand Teton", state="Wyoming"))
    await parks_repo.create(park_record(name="Yosemite", state="California"))

    assert [p.name for p in await parks_repo.search("STONE")] == ["Yellowstone"]
    assert [p.name for p in await parks_repo.search("wyo")] == ["Yellowstone", "Grand Teton"]
    assert await parks_repo.search("Everglades") == []


async def test_blank_search_equals_get_all(parks_repo):
    await parks_repo.create(park_record(name="Zion", state="Utah"))
    await parks_repo.create(park_record(name="Arches", state="Utah"))
    everything = [p.id for p in await parks_repo.get_all()]
    assert [p.id for p in await parks_repo.search("")] == everything
    assert [p.id for p in await parks_repo.search("   ")] == everything


async def test_search_treats_wildcards_literally(parks_repo):
    await parks_repo.create(park_record(name="Zion", state="Utah"))
    assert await parks_repo.search("%") == []
    assert await parks_repo.search("_") == []


async def test_exists_in_scope_respects_exclusion(parks_repo):
    park = await parks_repo.create(park_record())
    assert await parks_repo.exists_in_scope("Yellowstone", "Wyoming")
    assert not await parks_repo.exists_in_scope("Yellowstone", "Wyoming", exclude_id=park.id)
    assert not await parks_repo.exists_in_scope("Yellowstone", "Idaho")


# ─── update ──────────────────────────────────────────────────────

async def test_update_changes_only_given_fields(parks_repo):
    park = await parks_repo.create(park_record(description="Old"))
    updated = await parks_repo.update(park.id, {"description": "New"})
    assert updated.description == "New"
    assert updated.name == "Yellowstone"
    assert updated.state == "Wyoming"


async def test_update_to_own_name_and_state_is_not_conflict(parks_repo):
    park = await parks_repo.create(park_record())
    updated = await parks_repo.update(park.id, {"name": "Yellowstone", "state": "Wyoming"})
    assert updated.id == park.id


async def test_update_into_existing_pair_conflicts(parks_repo):
    await parks_repo.create(park_record(name="Zion", state="Utah"))
    other = await parks_repo.create(park_record(name="Arches", state="Utah"))
    with pytest.raises(ConflictError):
        await parks_repo.update(other.id, {"name": "Zion"})
    assert (await parks_repo.get_by_id(other.id)).name == "Arches"


async def test_update_scope_change_checks_new_pair(parks_repo):
    await parks_repo.create(park_record(name="Glacier", state="Montana"))
    other = await parks_repo.create(park_record(name="Glacier", state="Alaska"))
    with pytest.raises(ConflictError):
        await parks_repo.update(other.id, {"state": "Montana"})


async def test_update_preserves_created_at_and_advances_updated_at(parks_repo):
    park = await parks_repo.create(park_record())
    created_at, updated_at = park.created_at, park.updated_at

    updated = await parks_repo.update(park.id, {"description": "Geysers"})
    assert updated.created_at == created_at
    assert updated.updated_at >= updated_at


async def test_update_missing_raises_not_found(parks_repo):
    with pytest.raises(NotFoundError):
        await parks_repo.update(404, {"description": "x"})


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_removes_record(parks_repo):
    park = await parks_repo.create(park_record())
    await parks_repo.delete(park.id)
    assert await parks_repo.count() == 0
    with pytest.raises(NotFoundError):
        await parks_repo.get_by_id(park.id)


async def test_delete_missing_raises_not_found(parks_repo):
    with pytest.raises(NotFoundError):
        await parks_repo.delete(404)


async def test_deleted_name_can_be_reused(parks_repo):
    park = await parks_repo.create(park_record())
    await parks_repo.delete(park.id)
    again = await parks_repo.create(park_record())
    assert again.name == "Yellowstone"


# ─── store failures ─────────────────────────────────────────────

async def test_store_failure_becomes_store_error(test_db, monkeypatch):
    repo = ParksRepository(test_db)

    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(test_db, "execute", broken_execute)
    with pytest.raises(StoreError) as exc_info:
        await repo.get_all()
    assert exc_info.value.operation == "get_all"
