# ================================================================================
"""
Edit scripts between two board snapshots.

`diff_snapshots(old, new)` is a pure function producing a `ChangeBatch`: the
section and row edits that turn the old layout into the new one. Old paths
always refer to the pre-batch snapshot, new paths to the post-batch snapshot,
so the edits can be collected in any order and applied as one diff by
`apply_changes`.

Rules the diff follows:

• sections are matched by zone name, rows by primary key;
• rows inside an inserted or deleted section are implied by the section edit;
• a surviving row whose (zone, wins, name) did not change keeps its relative
  order, so it is never moved; if any other field changed it is updated;
• a surviving row whose sort fields changed is moved, unless it would land on
  the very same index path and staying put keeps the other stationary rows in
  order, in which case it is reported as an update instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

import structlog

from apps.teams.services.snapshot import IndexPath

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from apps.teams.services.snapshot import Snapshot

log = structlog.get_logger(__name__).bind(component="ChangeDiff")


class BatchUpdateError(RuntimeError):
    """Raised when a batch of edits does not match the display it is applied to."""


# ─── Edit Script Types ─────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class SectionInserted:
    index: int
    name: str

    kind: ClassVar[str] = "section_inserted"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "index": self.index, "name": self.name}


@dataclass(slots=True, frozen=True)
class SectionDeleted:
    index: int
    name: str

    kind: ClassVar[str] = "section_deleted"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "index": self.index, "name": self.name}


@dataclass(slots=True, frozen=True)
class RowInserted:
    pk: Any
    new_path: IndexPath

    kind: ClassVar[str] = "row_inserted"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "pk": self.pk, "new_path": self.new_path.to_dict()}


@dataclass(slots=True, frozen=True)
class RowDeleted:
    pk: Any
    old_path: IndexPath

    kind: ClassVar[str] = "row_deleted"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "pk": self.pk, "old_path": self.old_path.to_dict()}


@dataclass(slots=True, frozen=True)
class RowMoved:
    pk: Any
    old_path: IndexPath
    new_path: IndexPath

    kind: ClassVar[str] = "row_moved"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "pk": self.pk,
            "old_path": self.old_path.to_dict(),
            "new_path": self.new_path.to_dict(),
        }


@dataclass(slots=True, frozen=True)
class RowUpdated:
    pk: Any
    old_path: IndexPath
    new_path: IndexPath

    kind: ClassVar[str] = "row_updated"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "pk": self.pk,
            "old_path": self.old_path.to_dict(),
            "new_path": self.new_path.to_dict(),
        }


type SectionChange = SectionInserted | SectionDeleted
type RowChange = RowInserted | RowDeleted | RowMoved | RowUpdated
type Change = SectionChange | RowChange


@dataclass(slots=True, frozen=True)
class ChangeBatch:
    """An ordered edit script for one committed store mutation."""

    changes: tuple[Change, ...] = ()

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __bool__(self) -> bool:
        return bool(self.changes)

    @property
    def section_changes(self) -> list[SectionChange]:
        return [c for c in self.changes if isinstance(c, SectionInserted | SectionDeleted)]

    @property
    def row_changes(self) -> list[RowChange]:
        return [c for c in self.changes if not isinstance(c, SectionInserted | SectionDeleted)]

    def of_kind(self, kind: type[Change]) -> list[Change]:
        return [c for c in self.changes if isinstance(c, kind)]

    def to_list(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self.changes]


# ─── Diff ──────────────────────────────────────────────────────────────────────


def _keeps_order(stationary: list[tuple[int, int]], candidate: tuple[int, int]) -> bool:
    old_row, new_row = candidate
    return all((o < old_row) == (n < new_row) for o, n in stationary)


def diff_snapshots(old: Snapshot, new: Snapshot) -> ChangeBatch:
    """Computes the edit script turning *old* into *new*."""
    old_names = old.section_names
    new_names = new.section_names
    old_section_index = {name: i for i, name in enumerate(old_names)}
    new_section_index = {name: i for i, name in enumerate(new_names)}

    deleted_sections = {i for i, name in enumerate(old_names) if name not in new_section_index}
    inserted_sections = {i for i, name in enumerate(new_names) if name not in old_section_index}

    row_deletes: list[RowDeleted] = []
    row_inserts: list[RowInserted] = []
    moves: list[RowMoved] = []
    updates: list[RowUpdated] = []

    # (old row, new row) of rows that stay put, per surviving section name.
    stationary: dict[str, list[tuple[int, int]]] = {}
    same_path_moves: list[tuple[Any, IndexPath]] = []

    for row in old:
        old_path = old.index_path_for(row.pk)
        new_path = new.index_path_for(row.pk)
        if new_path is None:
            if old_path.section not in deleted_sections:
                row_deletes.append(RowDeleted(row.pk, old_path))
            continue

        new_row = new.object_at(new_path)
        source_gone = old_path.section in deleted_sections
        target_new = new_path.section in inserted_sections
        if source_gone and target_new:
            continue
        if source_gone:
            row_inserts.append(RowInserted(row.pk, new_path))
            continue
        if target_new:
            row_deletes.append(RowDeleted(row.pk, old_path))
            continue

        if row.ordering_key == new_row.ordering_key:
            stationary.setdefault(row.qualifying_zone, []).append((old_path.row, new_path.row))
            if row != new_row:
                updates.append(RowUpdated(row.pk, old_path, new_path))
        elif old_path == new_path and old_names[old_path.section] == new_names[new_path.section]:
            same_path_moves.append((row.pk, old_path))
        else:
            moves.append(RowMoved(row.pk, old_path, new_path))

    for pk, path in same_path_moves:
        zone = old_names[path.section]
        kept = stationary.setdefault(zone, [])
        if _keeps_order(kept, (path.row, path.row)):
            kept.append((path.row, path.row))
            updates.append(RowUpdated(pk, path, path))
        else:
            moves.append(RowMoved(pk, path, path))

    for row in new:
        if old.index_path_for(row.pk) is None:
            new_path = new.index_path_for(row.pk)
            if new_path.section not in inserted_sections:
                row_inserts.append(RowInserted(row.pk, new_path))

    changes: list[Change] = [SectionDeleted(i, old_names[i]) for i in sorted(deleted_sections)]
    changes += [SectionInserted(i, new_names[i]) for i in sorted(inserted_sections)]
    changes += sorted(row_deletes, key=lambda c: c.old_path)
    changes += sorted(moves, key=lambda c: c.old_path)
    changes += sorted(row_inserts, key=lambda c: c.new_path)
    changes += sorted(updates, key=lambda c: c.old_path)
    return ChangeBatch(tuple(changes))


# ─── Batch Application ─────────────────────────────────────────────────────────


def apply_changes(
    layout: Sequence[tuple[str, Sequence[Any]]],
    changes: Iterable[Change],
    source: Snapshot,
) -> list[tuple[str, list[Any]]]:
    """
    Applies an edit script to a displayed *layout* in one pass.

    *layout* is the pre-batch list of (section title, row keys); *source* is
    the post-batch snapshot the display reads inserted sections and rows from.
    Row deletes inside a deleted section and row inserts inside an inserted
    section are absorbed by the section edit. Any edit that does not fit the
    layout, or a result that disagrees with *source*, raises BatchUpdateError.
    """
    deleted_sections: set[int] = set()
    inserted_sections: set[int] = set()
    deleted_rows: set[tuple[int, int]] = set()
    inserted_rows: set[IndexPath] = set()
    reloaded_rows: set[tuple[int, int]] = set()

    def _check_old(path: IndexPath) -> tuple[int, int]:
        if not 0 <= path.section < len(layout) or not 0 <= path.row < len(layout[path.section][1]):
            msg = f"Invalid update: index path {path} does not exist before the update."
            raise BatchUpdateError(msg)
        return (path.section, path.row)

    for change in changes:
        match change:
            case SectionDeleted(index=index):
                if not 0 <= index < len(layout) or index in deleted_sections:
                    msg = f"Invalid update: cannot delete section {index}."
                    raise BatchUpdateError(msg)
                deleted_sections.add(index)
            case SectionInserted(index=index):
                if index in inserted_sections:
                    msg = f"Invalid update: section {index} inserted twice."
                    raise BatchUpdateError(msg)
                inserted_sections.add(index)
            case RowDeleted(old_path=old_path):
                deleted_rows.add(_check_old(old_path))
            case RowInserted(new_path=new_path):
                inserted_rows.add(new_path)
            case RowMoved(old_path=old_path, new_path=new_path):
                deleted_rows.add(_check_old(old_path))
                inserted_rows.add(new_path)
            case RowUpdated(old_path=old_path):
                reloaded_rows.add(_check_old(old_path))
            case _:
                msg = f"Unknown change {change!r}."
                raise BatchUpdateError(msg)

    if clash := reloaded_rows & deleted_rows:
        msg = f"Invalid update: rows {sorted(clash)} are both deleted and reloaded."
        raise BatchUpdateError(msg)

    sections: list[tuple[str, list[Any]]] = [
        (title, [key for r, key in enumerate(keys) if (s, r) not in deleted_rows])
        for s, (title, keys) in enumerate(layout)
        if s not in deleted_sections
    ]

    for index in sorted(inserted_sections):
        if index > len(sections) or index >= len(source.sections):
            msg = f"Invalid update: cannot insert section {index}."
            raise BatchUpdateError(msg)
        section = source.sections[index]
        sections.insert(index, (section.name, [row.pk for row in section.objects]))

    for path in sorted(inserted_rows):
        if path.section in inserted_sections:
            continue
        if path.section >= len(sections) or path.row > len(sections[path.section][1]):
            msg = f"Invalid update: cannot insert row at {path}."
            raise BatchUpdateError(msg)
        try:
            key = source.object_at(path).pk
        except IndexError as e:
            msg = f"Invalid update: no row at {path} after the update."
            raise BatchUpdateError(msg) from e
        sections[path.section][1].insert(path.row, key)

    expected = source.layout()
    if sections != expected:
        log.error(
            "batch_update_mismatch",
            sections_before=len(layout),
            sections_after=len(sections),
            sections_expected=len(expected),
        )
        msg = (
            "Invalid update: the number of sections or rows after the update does not "
            "match the data source."
        )
        raise BatchUpdateError(msg)
    return sections
