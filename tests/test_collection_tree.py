"""
Tests for collection tree helpers.
"""

from __future__ import annotations

from api_desk.domains.collection_tree import (
    add_item,
    find_duplicate_ids,
    find_item,
    find_request,
    flatten_folders,
    insert_before,
    remove_item,
    update_item,
)
from api_desk.domains.models import Folder
from tests.conftest import make_collection, make_request


def test_find_item_and_request_at_depth() -> None:
    collection = make_collection()

    assert find_item(collection.items, "folder-2").name == "Admin"
    assert find_request(collection, "req-3").request.url == "https://example.test/admin"
    assert find_request(collection, "folder-1") is None
    assert find_item(collection.items, "missing") is None


def test_update_item_does_not_mutate_input() -> None:
    collection = make_collection()

    items = update_item(collection.items, "req-3", lambda item: item.model_copy(update={"name": "Renamed"}))

    assert find_item(items, "req-3").name == "Renamed"
    assert find_item(collection.items, "req-3").name == "List users"


def test_remove_item_returns_removed() -> None:
    collection = make_collection()

    items, removed = remove_item(collection.items, "folder-2")

    assert isinstance(removed, Folder)
    assert find_item(items, "folder-2") is None
    assert find_item(items, "req-3") is None
    assert find_item(collection.items, "req-3") is not None

    same, nothing = remove_item(items, "missing")
    assert nothing is None
    assert same == items


def test_add_item_to_folder_expands_it() -> None:
    collection = make_collection()
    new = make_request("req-new")

    items = add_item(collection.items, "folder-2", new)

    folder = find_item(items, "folder-2")
    assert folder.expanded is True
    assert [i.id for i in folder.items] == ["req-3", "req-new"]


def test_add_item_top_level_and_unknown_folder() -> None:
    collection = make_collection()
    new = make_request("req-new")

    assert add_item(collection.items, None, new)[-1] is new
    assert add_item(collection.items, "nope", new) == collection.items


def test_insert_before_nested_target() -> None:
    collection = make_collection()

    items = insert_before(collection.items, "req-2", make_request("req-new"))

    folder = find_item(items, "folder-1")
    assert [i.id for i in folder.items] == ["req-1", "req-new", "req-2", "folder-2"]


def test_flatten_folders_labels() -> None:
    assert flatten_folders(make_collection().items) == [("folder-1", "Users"), ("folder-2", "Users / Admin")]


def test_find_duplicate_ids() -> None:
    items = [
        make_request("a"),
        Folder(id="f", name="F", items=[make_request("a"), make_request("b"), Folder(id="b", name="B")]),
    ]

    assert find_duplicate_ids(items) == ["a", "b"]
    assert find_duplicate_ids(make_collection().items) == []
