from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..deps import get_app_settings, get_store
from ..models import TodoEntity
from ..rendering import render_rows
from ..schemas import (
    FilterInput,
    NotificationOut,
    SearchInput,
    SortInput,
    StatsOut,
    TodoOut,
    ViewOut,
)
from ..settings import Settings
from ..store import TodoStore

router = APIRouter(
    prefix="/api/v1",
    tags=["view"],
)


def _view_envelope(store: TodoStore, settings: Settings, displayed: List[TodoEntity]) -> ViewOut:
    """
    Render the displayed list together with statistics of the canonical collection.
    """
    rows = render_rows(
        displayed,
        date_format=settings.date_display_format,
        no_results=store.view.show_placeholder,
    )
    return ViewOut(
        todos=[TodoOut(**t) for t in displayed],  # type: ignore[arg-type]
        rows=rows,
        stats=StatsOut(**store.stats().as_dict()),
    )


# PUBLIC_INTERFACE
@router.get(
    "/view/",
    response_model=ViewOut,
    summary="Displayed List",
    description="Return the currently displayed list, its rendered rows and the progress counters.",
)
def get_view(
    store: TodoStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> ViewOut:
    return _view_envelope(store, settings, store.displayed())


# PUBLIC_INTERFACE
@router.post(
    "/view/sort",
    response_model=ViewOut,
    summary="Sort Displayed List",
    description=(
        "Replace the displayed list with the whole collection ordered by due date. "
        "'default' restores insertion order; missing dates sort as the farthest future."
    ),
    responses={422: {"description": "Unknown sort order"}},
)
def sort_view(
    payload: SortInput,
    store: TodoStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ViewOut:
    return _view_envelope(store, settings, store.apply_sort(payload.order))


# PUBLIC_INTERFACE
@router.post(
    "/view/filter",
    response_model=ViewOut,
    summary="Filter Displayed List",
    description="Replace the displayed list with the todos of the given status ('all' shows everything).",
    responses={422: {"description": "Unknown status"}},
)
def filter_view(
    payload: FilterInput,
    store: TodoStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ViewOut:
    return _view_envelope(store, settings, store.apply_filter(payload.status))


# PUBLIC_INTERFACE
@router.post(
    "/view/search",
    response_model=ViewOut,
    summary="Search Displayed List",
    description=(
        "Replace the displayed list with todos whose text contains the term (case-insensitive). "
        "An empty term shows everything; no match renders a single placeholder row."
    ),
)
def search_view(
    payload: SearchInput,
    store: TodoStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ViewOut:
    return _view_envelope(store, settings, store.apply_search(payload.term))


# PUBLIC_INTERFACE
@router.post("/view/reset", response_model=ViewOut, summary="Reset Displayed List")
def reset_view(
    store: TodoStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> ViewOut:
    return _view_envelope(store, settings, store.reset_view())


# PUBLIC_INTERFACE
@router.get("/stats", response_model=StatsOut, summary="Progress Counters")
def get_stats(store: TodoStore = Depends(get_store)) -> StatsOut:
    return StatsOut(**store.stats().as_dict())


# PUBLIC_INTERFACE
@router.get(
    "/notification",
    response_model=Optional[NotificationOut],
    summary="Current Notification",
    description="Return the visible notification, or 204 when none is showing.",
    responses={204: {"description": "No notification"}},
)
def get_notification(store: TodoStore = Depends(get_store)):
    current = store.notifier.current
    if current is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return NotificationOut(message=current.message, severity=current.severity)  # type: ignore[arg-type]
