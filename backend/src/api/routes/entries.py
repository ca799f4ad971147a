"""HTTP API routes for entry listing, navigation and CRUD."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from ..dependencies import get_entry_store, get_tag_service, get_vault_session
from ..middleware import AuthContext, get_auth_context
from ...models.entry import (
    EntryCard,
    EntryCreate,
    EntryListResponse,
    EntryMutationResponse,
    EntryUpdate,
    ShareTarget,
)
from ...models.notification import Notification
from ...services.display import build_entry_card
from ...services.entries import EntryStore
from ...services.errors import ConfirmationRequiredError
from ...services.pagination import EntryPaginator
from ...services.sessions import VaultSession
from ...services.tags import TagService

router = APIRouter()

VAULT_UPDATED = "Your knowledge vault has been updated."


def _raise_if_failed(paginator: EntryPaginator) -> None:
    # Stale entries stay visible after a failed reload; only an empty view is an error.
    if paginator.error is not None and not paginator.entries:
        raise paginator.error


def render_view(
    session: VaultSession,
    store: EntryStore,
    tag_service: TagService,
) -> EntryListResponse:
    """Load the current page (cached per data version) and render what is displayed."""
    paginator = session.paginator
    paginator.load(store, session.data_version)
    _raise_if_failed(paginator)

    if session.search.is_active:
        mode, entries = "search", session.search.results or []
    else:
        mode, entries = "page", paginator.entries

    tag_colors = tag_service.get_tag_colors()
    return EntryListResponse(
        mode=mode,
        entries=[build_entry_card(entry, tag_colors) for entry in entries],
        pagination=paginator.info(),
        data_version=session.data_version,
        error=paginator.error.message if paginator.error else None,
    )


def _mutation_response(
    session: VaultSession,
    tag_service: TagService,
    entry,
    notification: Notification,
) -> EntryMutationResponse:
    card: Optional[EntryCard] = None
    if entry is not None:
        card = build_entry_card(entry, tag_service.get_tag_colors())
    return EntryMutationResponse(
        entry=card,
        notification=notification,
        data_version=session.mark_changed(),
    )


@router.get("/api/entries", response_model=EntryListResponse)
def list_entries(
    page: Optional[int] = Query(None, ge=1, description="Page to show (ignored when out of range)"),
    refresh: bool = Query(False, description="Invalidate cached pages before loading"),
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Entries currently displayed: search results if a search is active, else a page."""
    paginator = session.paginator
    if refresh:
        session.mark_changed()

    if page is not None and page != paginator.current_page:
        if not paginator.is_loaded:
            # Page bounds are unknown until the first count
            paginator.load(store, session.data_version)
            _raise_if_failed(paginator)
        paginator.go_to_page(page)

    return render_view(session, store, tag_service)


@router.post("/api/entries/next", response_model=EntryListResponse)
def next_page(
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Advance one page (no-op on the last page)."""
    session.paginator.next_page()
    return render_view(session, store, tag_service)


@router.post("/api/entries/prev", response_model=EntryListResponse)
def prev_page(
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Go back one page (no-op on the first page)."""
    session.paginator.prev_page()
    return render_view(session, store, tag_service)


@router.post("/api/entries", response_model=EntryMutationResponse, status_code=201)
def create_entry(
    create: EntryCreate,
    auth: AuthContext = Depends(get_auth_context),
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Create a new entry."""
    entry = store.create_entry(create, auth.user_id)
    tag_service.ensure_tags(auth.user_id, entry.tags)
    return _mutation_response(
        session, tag_service, entry, Notification.success("Entry Added", VAULT_UPDATED)
    )


@router.post("/api/entries/share", response_model=EntryMutationResponse, status_code=201)
def create_shared_entry(
    shared: ShareTarget,
    auth: AuthContext = Depends(get_auth_context),
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Create an entry from text or a link handed over by the share sheet."""
    try:
        create = shared.to_create()
    except ValidationError as exc:
        message = exc.errors()[0]["msg"].removeprefix("Value error, ")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "validation_error", "message": message},
        ) from exc

    entry = store.create_entry(create, auth.user_id)
    tag_service.ensure_tags(auth.user_id, entry.tags)
    return _mutation_response(
        session, tag_service, entry, Notification.success("Entry Added", VAULT_UPDATED)
    )


@router.get("/api/entries/{entry_id}", response_model=EntryCard)
def get_entry(
    entry_id: str,
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Get a single entry for the detail view."""
    entry = store.get_entry(entry_id)
    return build_entry_card(entry, tag_service.get_tag_colors())


@router.put("/api/entries/{entry_id}", response_model=EntryMutationResponse)
def update_entry(
    entry_id: str,
    update: EntryUpdate,
    auth: AuthContext = Depends(get_auth_context),
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Update an entry; the last write wins."""
    entry = store.update_entry(entry_id, update)
    tag_service.ensure_tags(auth.user_id, entry.tags)
    return _mutation_response(
        session, tag_service, entry, Notification.success("Update Successful", VAULT_UPDATED)
    )


@router.delete("/api/entries/{entry_id}", response_model=EntryMutationResponse)
def delete_entry(
    entry_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    session: VaultSession = Depends(get_vault_session),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """Delete an entry after explicit confirmation."""
    if not confirm:
        raise ConfirmationRequiredError()

    store.delete_entry(entry_id)
    return _mutation_response(
        session,
        tag_service,
        None,
        Notification.success("Entry Deleted", "The entry has been removed from your vault."),
    )


__all__ = ["router", "render_view"]
