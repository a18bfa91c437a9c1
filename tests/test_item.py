"""Tests for execution items."""

from dataclasses import fields

import karps
from karps._item import ExecutionItem, Locality
from karps._path import GlobalPath


def gp(local: str) -> GlobalPath:
    return GlobalPath.from_parts("s", "c", local)


def test_package_exports_execution_item() -> None:
    assert karps.ExecutionItem is ExecutionItem
    assert karps.Locality is Locality


def test_fields() -> None:
    assert [f.name for f in fields(ExecutionItem)] == [
        "path",
        "locality",
        "dependencies",
        "logical_dependencies",
    ]


def test_defaults_have_no_dependencies() -> None:
    item = ExecutionItem(gp("a"), Locality.LOCAL)
    assert item.dependencies == ()
    assert item.logical_dependencies == ()
    assert list(item.all_dependencies()) == []


def test_all_dependencies_lists_logical_first() -> None:
    item = ExecutionItem(
        gp("c"),
        Locality.DISTRIBUTED,
        dependencies=(gp("a"),),
        logical_dependencies=(gp("b"),),
    )
    assert list(item.all_dependencies()) == [gp("b"), gp("a")]


def test_is_tracked() -> None:
    assert ExecutionItem(gp("a"), Locality.LOCAL).is_tracked
    assert not ExecutionItem(gp("a"), Locality.DISTRIBUTED).is_tracked
