"""HTTP API routes for search, tag filters and tag colors."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_entry_store, get_tag_service, get_vault_session
from ..middleware import AuthContext, get_auth_context
from ...models.entry import EntryListResponse
from ...models.search import SearchRequest, SearchState, TagSelection
from ...models.tag import TagColor, TagColorUpdate, TagListResponse, TagView
from ...services.entries import EntryStore
from ...services.sessions import VaultSession
from ...services.tag_colors import get_tag_color_classes
from ...services.tags import TagService
from .entries import render_view

router = APIRouter()


@router.get("/api/search", response_model=SearchState)
async def get_search_state(session: VaultSession = Depends(get_vault_session)):
    """Current search form and whether results replace the paginated view."""
    return session.search.state()


@router.post("/api/search", response_model=EntryListResponse)
def run_search(
    request: SearchRequest,
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """
    Search entries by text (title or content, case-insensitive) and tags.

    Every given tag must be present on a match. An empty query with no tags
    clears the search and returns the paginated view.
    """
    search = session.search
    search.query = request.query
    if request.tags is not None:
        search.set_tags(request.tags)
    search.run(store)
    return render_view(session, store, tag_service)


@router.delete("/api/search", response_model=EntryListResponse)
def clear_search(
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Reset the search form and return to the paginated view."""
    session.search.clear()
    return render_view(session, store, tag_service)


@router.post("/api/search/tags", response_model=SearchState)
async def select_tag(
    selection: TagSelection,
    session: VaultSession = Depends(get_vault_session),
):
    """Add a tag filter; ``added`` is false for empty or repeated tags."""
    added = session.search.add_tag(selection.tag)
    return session.search.state(added=added)


@router.delete("/api/search/tags/{tag}", response_model=SearchState)
async def unselect_tag(
    tag: str,
    session: VaultSession = Depends(get_vault_session),
):
    session.search.remove_tag(tag)
    return session.search.state()


@router.get("/api/tags", response_model=TagListResponse)
def list_tags(
    q: str = Query("", max_length=128, description="Filter for picker suggestions"),
    session: VaultSession = Depends(get_vault_session),
    tag_service: TagService = Depends(get_tag_service),
):
    """All tags of the user with display classes, plus unselected matches for the picker."""
    names = tag_service.list_tags()
    tag_colors = tag_service.get_tag_colors()
    return TagListResponse(
        tags=[TagView(name=name, classes=get_tag_color_classes(name, tag_colors)) for name in names],
        suggestions=session.search.filtered_tags(names, q),
    )


@router.get("/api/tags/colors", response_model=dict[str, TagColor])
def get_tag_colors(tag_service: TagService = Depends(get_tag_service)):
    return tag_service.get_tag_colors()


@router.put("/api/tags/{tag_name}/color", response_model=TagColor)
def set_tag_color(
    tag_name: str,
    update: TagColorUpdate,
    auth: AuthContext = Depends(get_auth_context),
    tag_service: TagService = Depends(get_tag_service),
):
    """Store custom colors for a tag; used by every card and chip showing it."""
    return tag_service.set_tag_color(auth.user_id, tag_name, update)


__all__ = ["router"]
