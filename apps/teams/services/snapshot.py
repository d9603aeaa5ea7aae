# ================================================================================
"""
Immutable, sorted and grouped snapshots of the team table.

A `Snapshot` is what the board shows at one point in time: sections keyed by
qualifying zone, each holding `TeamRow` value objects in display order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import groupby
from typing import TYPE_CHECKING, Any, Self

from common.text_utils import standard_sort_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from apps.teams.services.protocols import TeamRecord


@dataclass(slots=True, frozen=True, order=True)
class IndexPath:
    """Position of a row: section index, then row index within the section."""

    section: int
    row: int

    def __str__(self) -> str:
        return f"[{self.section}, {self.row}]"

    def to_dict(self) -> dict[str, int]:
        return {"section": self.section, "row": self.row}


@dataclass(slots=True, frozen=True)
class TeamRow:
    """A validated, detached copy of one team as the board displays it."""

    pk: Any
    team_name: str
    qualifying_zone: str
    image_name: str | None
    wins: int

    @classmethod
    def from_record(cls, record: TeamRecord) -> Self:
        return cls(
            pk=record.pk,
            team_name=record.team_name or "",
            qualifying_zone=record.qualifying_zone or "",
            image_name=record.image_name or None,
            wins=int(record.wins or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.pk,
            "team_name": self.team_name,
            "qualifying_zone": self.qualifying_zone,
            "image_name": self.image_name,
            "wins": self.wins,
        }

    @property
    def ordering_key(self) -> tuple[str, int, str]:
        """The fields the board sorts and groups by."""
        return (self.qualifying_zone, self.wins, self.team_name)

    def sort_key(self) -> tuple[Any, ...]:
        # Raw strings and pk break ties left by the folded comparison.
        return (
            standard_sort_key(self.qualifying_zone),
            self.qualifying_zone,
            -self.wins,
            standard_sort_key(self.team_name),
            self.team_name,
            self.pk,
        )


def section_sort_key(name: str) -> tuple[Any, ...]:
    return (standard_sort_key(name), name)


@dataclass(slots=True, frozen=True)
class SectionInfo:
    """One zone group of the result set."""

    name: str
    objects: tuple[TeamRow, ...]

    @property
    def number_of_objects(self) -> int:
        return len(self.objects)


@dataclass(slots=True, frozen=True)
class Snapshot:
    sections: tuple[SectionInfo, ...] = ()
    _paths: dict[Any, IndexPath] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        paths = {
            row.pk: IndexPath(s, r)
            for s, section in enumerate(self.sections)
            for r, row in enumerate(section.objects)
        }
        object.__setattr__(self, "_paths", paths)

    @classmethod
    def empty(cls) -> Self:
        return cls(())

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[TeamRow]:
        for section in self.sections:
            yield from section.objects

    @property
    def section_names(self) -> list[str]:
        return [s.name for s in self.sections]

    def object_at(self, path: IndexPath) -> TeamRow:
        """Returns the row at *path*; raises IndexError when out of range."""
        if path.section < 0 or path.row < 0:
            msg = f"Index path {path} is out of range."
            raise IndexError(msg)
        try:
            return self.sections[path.section].objects[path.row]
        except IndexError as e:
            msg = f"Index path {path} is out of range."
            raise IndexError(msg) from e

    def index_path_for(self, pk: Any) -> IndexPath | None:
        return self._paths.get(pk)

    def layout(self) -> list[tuple[str, list[Any]]]:
        """Section names with the primary keys of their rows, in display order."""
        return [(s.name, [row.pk for row in s.objects]) for s in self.sections]


def build_snapshot(records: Iterable[TeamRecord]) -> Snapshot:
    """Sorts by zone, wins (descending) and name, then groups by exact zone."""
    rows = sorted((TeamRow.from_record(r) for r in records), key=TeamRow.sort_key)
    sections = tuple(
        SectionInfo(name=zone, objects=tuple(group))
        for zone, group in groupby(rows, key=lambda row: row.qualifying_zone)
    )
    return Snapshot(sections)
