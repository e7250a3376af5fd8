"""Global search API: one-shot REST search and a live WebSocket search session."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from coop_portal.api.v1.dependencies import (
    build_authorization_context,
    get_authorization_context,
    get_global_search_service,
    get_profile_repo,
    get_scope_repo,
)
from coop_portal.application.dtos.search import AuthorizationContext, SearchSnapshot
from coop_portal.application.interfaces.repositories import (
    ICooperativeScopeRepository,
    IUserProfileRepository,
)
from coop_portal.application.services.search_catalog import (
    search_hint,
    search_placeholder,
)
from coop_portal.application.use_cases.cooperative_scope import (
    CooperativeScopeResolver,
)
from coop_portal.application.use_cases.search import GlobalSearchService
from coop_portal.application.use_cases.search_session import SearchSession
from coop_portal.core.config import get_settings
from coop_portal.core.limiter import limit_search
from coop_portal.infrastructure.security.jwt import user_id_from_token
from coop_portal.schemas.search import (
    GlobalSearchResponse,
    SearchErrorMessage,
    SearchQueryMessage,
    SearchSnapshotMessage,
    category_groups,
)
from coop_portal.shared.utils.sanitization import normalize_query

router = APIRouter()


@router.get(
    "",
    response_model=GlobalSearchResponse,
    responses={
        404: {"description": "Cooperative admin has no cooperative"},
        502: {"description": "Every category query failed"},
    },
)
@limit_search
async def global_search(
    request: Request,
    ctx: Annotated[AuthorizationContext, Depends(get_authorization_context)],
    search_svc: Annotated[GlobalSearchService, Depends(get_global_search_service)],
    q: str = Query("", max_length=500, description="Search text"),
    max_per_category: int | None = Query(
        None, ge=1, description="Cap per category (default from settings)"
    ),
) -> GlobalSearchResponse:
    """Search every category the caller's role may see.

    Returns only non-empty categories, in fixed priority order. A query
    shorter than the minimum length returns no categories.
    """
    settings = get_settings()
    query = normalize_query(q)
    outcome = await search_svc.search(
        query,
        ctx,
        max_per_category or settings.search_default_max_per_category,
    )
    return GlobalSearchResponse(
        query=query,
        total_count=outcome.total_count,
        categories=category_groups(outcome.results, query),
        failed_categories=list(outcome.failed_categories),
        placeholder=search_placeholder(ctx.role),
        hint=search_hint(ctx.role, settings.search_min_query_length),
    )


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


@router.websocket("/ws")
async def search_websocket(
    websocket: WebSocket,
    search_svc: Annotated[GlobalSearchService, Depends(get_global_search_service)],
    profile_repo: Annotated[IUserProfileRepository, Depends(get_profile_repo)],
    scope_repo: Annotated[ICooperativeScopeRepository, Depends(get_scope_repo)],
):
    """Live search: client sends {"query": ...} per keystroke, server pushes snapshots.

    Token must be provided as query param (?token=<jwt>). Searches are
    debounced; a newer query supersedes older ones and stale results are
    never pushed.
    """
    try:
        user_id = user_id_from_token(websocket.query_params.get("token"))
    except ValueError:
        await _reject_websocket(websocket, "Invalid token")
        return
    settings = get_settings()
    ctx = await build_authorization_context(user_id, profile_repo)
    await websocket.accept()

    async def push(snapshot: SearchSnapshot) -> None:
        await websocket.send_json(
            SearchSnapshotMessage.from_snapshot(snapshot).model_dump(mode="json")
        )

    session = SearchSession(
        search_svc,
        ctx,
        scope_resolver=CooperativeScopeResolver(scope_repo),
        debounce_seconds=settings.search_debounce_seconds,
        max_per_category=settings.search_default_max_per_category,
        on_snapshot=push,
    )
    await session.start()
    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = SearchQueryMessage.model_validate_json(data)
            except ValidationError:
                await websocket.send_json(
                    SearchErrorMessage(
                        message='Expected a JSON object like {"query": "..."}'
                    ).model_dump()
                )
                continue
            session.update_query(normalize_query(message.query))
    except WebSocketDisconnect:
        pass
    finally:
        await session.close()
