"""SearchSession tests: debouncing, stale-result discard, cooperative scope gating."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from coop_portal.application.dtos.search import AuthorizationContext, SearchSnapshot
from coop_portal.application.use_cases.cooperative_scope import (
    CooperativeScopeResolver,
)
from coop_portal.application.use_cases.search import GlobalSearchService
from coop_portal.application.use_cases.search_session import SearchSession
from coop_portal.domain.enums import UserRole
from search_fakes import GATEWAY_METHODS, make_result

ADMIN = AuthorizationContext(role=UserRole.SUPER_ADMIN, user_id="u-1")


@pytest.fixture
def service(gateway: AsyncMock) -> GlobalSearchService:
    return GlobalSearchService(gateway)


def _session(service: GlobalSearchService, snapshots: list, **kwargs) -> SearchSession:
    kwargs.setdefault("debounce_seconds", 0)
    kwargs.setdefault("ctx", ADMIN)
    return SearchSession(service, on_snapshot=snapshots.append, **kwargs)


async def test_debounce_collapses_keystroke_burst(
    service: GlobalSearchService, gateway: AsyncMock
) -> None:
    """Keystrokes inside the quiet period produce one search, for the last query."""
    snapshots: list[SearchSnapshot] = []
    session = _session(service, snapshots, debounce_seconds=0.2)
    session.update_query("da")
    await asyncio.sleep(0.04)
    session.update_query("dai")
    await asyncio.sleep(0.02)
    session.update_query("dair")
    await session.wait_idle()

    gateway.search_cooperatives.assert_awaited_once_with("dair", 5)
    assert session.snapshot.query == "dair"
    assert session.snapshot.total_count == 8
    assert not session.snapshot.loading
    await session.close()


async def test_keystrokes_after_quiet_period_search_again(
    service: GlobalSearchService, gateway: AsyncMock
) -> None:
    snapshots: list[SearchSnapshot] = []
    session = _session(service, snapshots, debounce_seconds=0.05)
    session.update_query("da")
    await session.wait_idle()
    session.update_query("dairy")
    await session.wait_idle()
    assert [c.args[0] for c in gateway.search_cooperatives.await_args_list] == [
        "da",
        "dairy",
    ]
    await session.close()


async def test_loading_snapshot_precedes_result(service: GlobalSearchService) -> None:
    snapshots: list[SearchSnapshot] = []
    session = _session(service, snapshots)
    generation = session.update_query("coop")
    await session.wait_idle()
    assert [s.loading for s in snapshots] == [True, False]
    assert all(s.generation == generation for s in snapshots)
    await session.close()


async def test_stale_result_is_discarded(
    service: GlobalSearchService, gateway: AsyncMock
) -> None:
    """A slow search for an older query never overwrites a newer result."""
    reached_store = asyncio.Event()
    release = asyncio.Event()

    async def cooperatives(q: str, limit: int, **kwargs):
        if q == "alpha":
            reached_store.set()
            await release.wait()
        return [make_result("cooperative", title=f"{q} coop")]

    gateway.search_cooperatives = AsyncMock(side_effect=cooperatives)
    snapshots: list[SearchSnapshot] = []
    # Long debounce: searches below are driven directly through run().
    session = _session(service, snapshots, debounce_seconds=60)

    first = session.update_query("alpha")
    slow = asyncio.create_task(session.run("alpha", first))
    await reached_store.wait()
    second = session.update_query("beta")
    await session.run("beta", second)
    release.set()
    await slow

    assert session.snapshot.query == "beta"
    assert session.snapshot.results.cooperatives[0].title == "beta coop"
    assert not any(
        s.results.cooperatives and s.results.cooperatives[0].title == "alpha coop"
        for s in snapshots
    )
    await session.close()


async def test_short_query_publishes_empty_without_store_calls(
    service: GlobalSearchService, gateway: AsyncMock
) -> None:
    snapshots: list[SearchSnapshot] = []
    session = _session(service, snapshots)
    session.update_query("a")
    await session.wait_idle()
    assert session.snapshot.query == "a"
    assert session.snapshot.total_count == 0
    assert not session.snapshot.loading
    for method in GATEWAY_METHODS:
        getattr(gateway, method).assert_not_awaited()
    await session.close()


async def test_total_failure_sets_error(
    service: GlobalSearchService, gateway: AsyncMock
) -> None:
    for method in GATEWAY_METHODS:
        setattr(gateway, method, AsyncMock(side_effect=RuntimeError("db down")))
    snapshots: list[SearchSnapshot] = []
    session = _session(service, snapshots)
    session.update_query("coop")
    await session.wait_idle()
    assert session.snapshot.error == "Search failed"
    assert session.snapshot.total_count == 0
    await session.close()


async def test_unresolvable_cooperative_scope_reports_not_found(
    service: GlobalSearchService, gateway: AsyncMock
) -> None:
    """Cooperative admin without a cooperative: not-found state, no scoped queries."""
    scope_repo = AsyncMock()
    scope_repo.get_member_cooperative_id = AsyncMock(return_value=None)
    scope_repo.get_first_cooperative_id_for_tenant = AsyncMock(return_value=None)
    snapshots: list[SearchSnapshot] = []
    session = _session(
        service,
        snapshots,
        ctx=AuthorizationContext(
            role=UserRole.COOPERATIVE_ADMIN, tenant_id="t-1", user_id="u-5"
        ),
        scope_resolver=CooperativeScopeResolver(scope_repo),
    )
    await session.start()
    session.update_query("coop")
    await session.wait_idle()

    assert session.snapshot.cooperative_not_found
    assert session.snapshot.error is None
    for method in GATEWAY_METHODS:
        getattr(gateway, method).assert_not_awaited()
    await session.close()


async def test_search_waits_for_cooperative_scope(
    service: GlobalSearchService, gateway: AsyncMock
) -> None:
    """No scoped query runs while the admin's cooperative is still being resolved."""
    release = asyncio.Event()

    async def member_lookup(user_id: str) -> str:
        await release.wait()
        return "coop-42"

    scope_repo = AsyncMock()
    scope_repo.get_member_cooperative_id = AsyncMock(side_effect=member_lookup)
    snapshots: list[SearchSnapshot] = []
    session = _session(
        service,
        snapshots,
        ctx=AuthorizationContext(role=UserRole.COOPERATIVE_ADMIN, user_id="u-5"),
        scope_resolver=CooperativeScopeResolver(scope_repo),
    )
    await session.start()
    session.update_query("coop")
    await asyncio.sleep(0.05)
    assert session.cooperative_scope_pending
    gateway.search_complaints.assert_not_awaited()
    gateway.search_cooperatives.assert_not_awaited()

    release.set()
    await session.wait_idle()
    gateway.search_complaints.assert_awaited_once_with(
        "coop", 5, cooperative_ids=["coop-42"]
    )
    assert not session.snapshot.cooperative_not_found
    await session.close()


async def test_listener_errors_do_not_break_session(service: GlobalSearchService) -> None:
    calls: list[SearchSnapshot] = []

    def flaky(snapshot: SearchSnapshot) -> None:
        calls.append(snapshot)
        raise RuntimeError("socket closed")

    session = SearchSession(service, ADMIN, debounce_seconds=0, on_snapshot=flaky)
    session.update_query("coop")
    await session.wait_idle()
    assert session.snapshot.total_count == 8
    assert len(calls) == 2
    await session.close()


async def test_closed_session_rejects_queries(service: GlobalSearchService) -> None:
    session = SearchSession(service, ADMIN)
    await session.close()
    with pytest.raises(RuntimeError):
        session.update_query("coop")
