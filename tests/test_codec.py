# tests/test_codec.py

from __future__ import annotations

import io
import json

import pytest

from todo_keeper.categories.category_models import Category
from todo_keeper.core.records import U64_MAX
from todo_keeper.storage import codec
from todo_keeper.storage.errors import MalformedDocument
from todo_keeper.tasks.task_models import Task

from .fakes import make_category, make_task


def _rich_tasks(n: int) -> list[Task]:
    parent = make_category(1, "Work")
    child = make_category(2, "Reports", parent_id=1, color="#ff0000")
    out = []
    for i in range(n):
        out.append(
            make_task(
                1_700_000_000_000 + i,
                f"task ñ {i}",
                completed=i % 2 == 0,
                position=i,
                due_date="2024-06-01T00:00:00.000Z" if i % 3 == 0 else None,
                category=(parent, child, None)[i % 3],
            )
        )
    return out


@pytest.mark.parametrize("n", [0, 1, 99, 100, 150])
def test_tasks_round_trip_in_both_tiers(n: int) -> None:
    tasks = _rich_tasks(n)
    assert codec.decode(codec.encode(tasks), Task) == tasks


def test_categories_round_trip() -> None:
    cats = [make_category(1), make_category(2, parent_id=1), make_category(3, parent_id=999)]
    assert codec.decode(codec.encode(cats), Category) == cats


def test_pretty_below_threshold_compact_at_threshold() -> None:
    pretty = codec.encode(_rich_tasks(99)).decode("utf-8")
    compact = codec.encode(_rich_tasks(100)).decode("utf-8")

    assert pretty.startswith("[\n  {")
    assert "\n" not in compact
    assert '"id":1700000000000' in compact


def test_custom_pretty_threshold() -> None:
    out = codec.encode([make_task(1)], pretty_threshold=1).decode("utf-8")
    assert "\n" not in out


def test_absent_optional_fields_are_omitted() -> None:
    doc = json.loads(codec.encode([make_task(7)]))
    assert doc == [
        {
            "id": 7,
            "text": "task 7",
            "completed": False,
            "created_at": "2024-05-01T10:00:00.000Z",
            "position": 0,
        }
    ]


def test_trashed_at_uses_external_key() -> None:
    doc = json.loads(codec.encode([make_task(7, trashed_at="2024-05-02T00:00:00Z")]))
    assert doc[0]["trashedAt"] == "2024-05-02T00:00:00Z"
    assert "trashed_at" not in doc[0]


def test_null_optionals_decode_as_absent() -> None:
    raw = (
        '[{"id": 1, "text": "a", "completed": false, "created_at": "t", "position": 0,'
        ' "due_date": null, "category": null, "trashedAt": null}]'
    )
    [task] = codec.decode(raw, Task)
    assert task.due_date is None and task.category is None and task.trashed_at is None


def test_unknown_keys_are_ignored() -> None:
    raw = '[{"id": 1, "text": "a", "completed": true, "created_at": "t", "position": 3, "extra": 1}]'
    assert codec.decode(raw, Task) == [make_task(1, "a", completed=True, created_at="t", position=3)]


@pytest.mark.parametrize("data", [b"", b"   ", "\n\t  \r\n", ""])
def test_empty_or_whitespace_is_empty_collection(data) -> None:
    assert codec.decode(data, Task) == []


def test_non_ascii_is_written_as_utf8() -> None:
    data = codec.encode([make_task(1, "café ✓")])
    assert "café ✓".encode("utf-8") in data


@pytest.mark.parametrize(
    "raw, needle",
    [
        ("[{", "todos.json"),
        ('{"id": 1}', "expected a JSON array"),
        ("[1]", "expected an object"),
        ('[{"id": 1, "text": "a", "completed": false, "position": 0}]', "created_at"),
        ('[{"id": true, "text": "a", "completed": false, "created_at": "t", "position": 0}]', "`id`"),
        ('[{"id": -1, "text": "a", "completed": false, "created_at": "t", "position": 0}]', "out of range"),
        ('[{"id": 1, "text": "a", "completed": 0, "created_at": "t", "position": 0}]', "`completed`"),
        ('[{"id": 1, "text": "a", "completed": false, "created_at": "t", "position": -2}]', "negative"),
        ('[{"id": 1.5, "text": "a", "completed": false, "created_at": "t", "position": 0}]', "`id`"),
        ('[{"id": NaN, "text": "a", "completed": false, "created_at": "t", "position": 0}]', "NaN"),
    ],
)
def test_malformed_documents_raise(raw: str, needle: str) -> None:
    with pytest.raises(MalformedDocument) as exc_info:
        codec.decode(raw, Task, source="todos.json")
    err = exc_info.value
    assert err.filename == "todos.json"
    assert str(err).startswith("Failed to parse todos.json: ")
    assert needle in str(err)


def test_malformed_embedded_category_names_the_field() -> None:
    raw = (
        '[{"id": 1, "text": "a", "completed": false, "created_at": "t", "position": 0,'
        ' "category": {"id": 2, "name": "x"}}]'
    )
    with pytest.raises(MalformedDocument, match="category"):
        codec.decode(raw, Task, source="todos.json")


def test_invalid_utf8_is_malformed() -> None:
    with pytest.raises(MalformedDocument, match="UTF-8"):
        codec.decode(b"[\xff]", Task, source="trash.json")


def test_u64_bounds() -> None:
    ok = f'[{{"id": {U64_MAX}, "name": "n", "color": "c"}}]'
    assert codec.decode(ok, Category)[0].id == U64_MAX

    too_big = f'[{{"id": {U64_MAX + 1}, "name": "n", "color": "c"}}]'
    with pytest.raises(MalformedDocument):
        codec.decode(too_big, Category)


def test_decode_stream_matches_decode_and_leaves_file_open() -> None:
    tasks = _rich_tasks(120)
    data = codec.encode(tasks)
    fp = io.BytesIO(data)

    assert codec.decode_stream(fp, Task, source="todos.json") == codec.decode(data, Task)
    assert not fp.closed


def test_decode_stream_whitespace_only() -> None:
    assert codec.decode_stream(io.BytesIO(b" " * 20_000), Task) == []


def test_lone_surrogate_in_file_is_malformed() -> None:
    raw = '[{"id": 1, "text": "\\ud800", "completed": false, "created_at": "t", "position": 0}]'
    with pytest.raises(MalformedDocument, match="`text`"):
        codec.decode(raw, Task, source="todos.json")


def test_lone_surrogate_in_embedded_category_is_malformed() -> None:
    raw = (
        '[{"id": 1, "text": "a", "completed": false, "created_at": "t", "position": 0,'
        ' "category": {"id": 2, "name": "\\udfff", "color": "#fff"}}]'
    )
    with pytest.raises(MalformedDocument, match="category"):
        codec.decode(raw, Task, source="todos.json")


def test_paired_surrogate_escape_is_accepted() -> None:
    raw = '[{"id": 1, "text": "\\ud83d\\ude00", "completed": false, "created_at": "t", "position": 0}]'
    [task] = codec.decode(raw, Task)
    assert task.text == "\U0001F600"


def test_encode_refuses_unencodable_text() -> None:
    with pytest.raises(MalformedDocument) as exc_info:
        codec.encode([make_task(1, "\ud800")], source="todos.json")
    assert exc_info.value.filename == "todos.json"


def test_deeply_nested_document_is_malformed() -> None:
    raw = "[" * 100_000 + "]" * 100_000
    with pytest.raises(MalformedDocument, match="recursion limit exceeded") as exc_info:
        codec.decode(raw, Task, source="todos.json")
    assert exc_info.value.filename == "todos.json"
