"""
Pure helpers over a collection's folder/request tree.

Every function returns new lists and copies the folders it changes; the input
tree is never mutated, so a caller can keep the last saved version around for
dirty checks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from api_desk.domains.models import Collection, CollectionItem, Folder, SavedRequest


def iter_items(items: list[CollectionItem]) -> Iterator[CollectionItem]:
    """Depth-first, pre-order walk over every folder and request."""
    for item in items:
        yield item
        if isinstance(item, Folder):
            yield from iter_items(item.items)


def find_item(items: list[CollectionItem], item_id: str) -> CollectionItem | None:
    for item in iter_items(items):
        if item.id == item_id:
            return item
    return None


def find_request(collection: Collection, item_id: str) -> SavedRequest | None:
    item = find_item(collection.items, item_id)
    return item if isinstance(item, SavedRequest) else None


def update_item(
    items: list[CollectionItem],
    item_id: str,
    updater: Callable[[CollectionItem], CollectionItem],
) -> list[CollectionItem]:
    """Replace every item with `item_id` by `updater(item)`."""
    out: list[CollectionItem] = []
    for item in items:
        if item.id == item_id:
            out.append(updater(item))
        elif isinstance(item, Folder):
            out.append(item.model_copy(update={"items": update_item(item.items, item_id, updater)}))
        else:
            out.append(item)
    return out


def remove_item(
    items: list[CollectionItem],
    item_id: str,
) -> tuple[list[CollectionItem], CollectionItem | None]:
    """
    Drop every item with `item_id`, at any depth.

    Returns:
        The pruned tree and the last item removed (None if nothing matched).
    """
    removed: CollectionItem | None = None
    out: list[CollectionItem] = []
    for item in items:
        if item.id == item_id:
            removed = item
            continue
        if isinstance(item, Folder):
            children, child_removed = remove_item(item.items, item_id)
            if child_removed is not None:
                removed = child_removed
            out.append(item.model_copy(update={"items": children}))
        else:
            out.append(item)
    return out, removed


def add_item(
    items: list[CollectionItem],
    folder_id: str | None,
    new_item: CollectionItem,
) -> list[CollectionItem]:
    """
    Append `new_item` to the folder `folder_id`, or to the top level when None.

    The receiving folder is expanded. An unknown folder id leaves the tree unchanged.
    """
    if folder_id is None:
        return [*items, new_item]

    out: list[CollectionItem] = []
    for item in items:
        if isinstance(item, Folder) and item.id == folder_id:
            out.append(item.model_copy(update={"items": [*item.items, new_item], "expanded": True}))
        elif isinstance(item, Folder):
            out.append(item.model_copy(update={"items": add_item(item.items, folder_id, new_item)}))
        else:
            out.append(item)
    return out


def insert_before(
    items: list[CollectionItem],
    target_id: str,
    new_item: CollectionItem,
) -> list[CollectionItem]:
    """Insert `new_item` directly in front of `target_id`, at whatever depth it lives."""
    out: list[CollectionItem] = []
    for item in items:
        if item.id == target_id:
            out.extend((new_item, item))
        elif isinstance(item, Folder):
            out.append(item.model_copy(update={"items": insert_before(item.items, target_id, new_item)}))
        else:
            out.append(item)
    return out


def flatten_folders(items: list[CollectionItem], prefix: str = "") -> list[tuple[str, str]]:
    """(id, "Parent / Child") for every folder, for "move to folder" pickers."""
    out: list[tuple[str, str]] = []
    for item in items:
        if isinstance(item, Folder):
            label = f"{prefix} / {item.name}" if prefix else item.name
            out.append((item.id, label))
            out.extend(flatten_folders(item.items, label))
    return out


def find_duplicate_ids(items: list[CollectionItem]) -> list[str]:
    """Ids used by more than one folder/request in the tree, in first-seen order."""
    seen: set[str] = set()
    dupes: list[str] = []
    for item in iter_items(items):
        if item.id in seen and item.id not in dupes:
            dupes.append(item.id)
        seen.add(item.id)
    return dupes
