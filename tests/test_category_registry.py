# tests/test_category_registry.py

from __future__ import annotations

from todo_keeper.categories.registry import CategoryRegistry
from todo_keeper.storage.collection_store import FileCollectionStore
from todo_keeper.tasks.lifecycle import TaskLifecycleManager

from .fakes import make_category, make_task


def test_save_and_load_categories(store: FileCollectionStore) -> None:
    reg = CategoryRegistry(store)
    assert reg.load_categories() == []

    cats = [make_category(1, "Work"), make_category(2, "Reports", parent_id=1)]
    reg.save_categories(cats)
    assert reg.load_categories() == cats


def test_roots_and_children_follow_stored_order(store: FileCollectionStore) -> None:
    reg = CategoryRegistry(store)
    reg.save_categories(
        [
            make_category(10, "B"),
            make_category(11, "b-child-2", parent_id=10),
            make_category(1, "A"),
            make_category(12, "b-child-1", parent_id=10),
        ]
    )

    assert [c.id for c in reg.root_categories()] == [10, 1]
    assert [c.id for c in reg.subcategories(10)] == [11, 12]
    assert reg.subcategories(1) == []


def test_deleting_parent_leaves_dangling_children(store: FileCollectionStore) -> None:
    reg = CategoryRegistry(store)
    reg.save_categories([make_category(1), make_category(2, parent_id=1)])

    reg.save_categories([c for c in reg.load_categories() if c.id != 1])

    [orphan] = reg.load_categories()
    assert orphan.parent_id == 1
    # a dangling parent is neither a root nor reachable as a child of a live category
    assert reg.root_categories() == []
    assert reg.subcategories(1) == [orphan]


def test_category_edits_do_not_reach_embedded_snapshots(store: FileCollectionStore) -> None:
    reg = CategoryRegistry(store)
    tasks = TaskLifecycleManager(store)
    work = make_category(1, "Work", color="#111111")
    reg.save_categories([work])
    tasks.save_active([make_task(5, category=work)])

    reg.save_categories([make_category(1, "Job", color="#222222")])
    reg.save_categories([])

    [task] = tasks.load_active()
    assert task.category == work
