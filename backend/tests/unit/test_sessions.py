from backend.src.services.sessions import SessionRegistry


def test_registry_keeps_one_session_per_user() -> None:
    registry = SessionRegistry(page_size=10)

    first = registry.get("user-1")
    first.search.add_tag("AI")

    assert registry.get("user-1") is first
    assert registry.get("user-2") is not first
    assert registry.get("user-2").search.selected_tags == []
    assert first.paginator.page_size == 10


def test_mark_changed_bumps_data_version() -> None:
    session = SessionRegistry(page_size=10).get("user-1")

    assert session.data_version == 0
    assert session.mark_changed() == 1
    assert session.data_version == 1


def test_registry_evicts_least_recently_used_user() -> None:
    registry = SessionRegistry(page_size=10, max_sessions=2)

    kept = registry.get("user-1")
    registry.get("user-2")
    registry.get("user-1")
    registry.get("user-3")

    assert "user-2" not in registry
    assert "user-1" in registry
    assert "user-3" in registry
    assert registry.get("user-1") is kept
    assert registry.get("user-2").data_version == 0
