# ================================================================================
"""
TeamListDisplay – the list surface the board renders into.

The display keeps its own layout (section titles and row keys) and a cache of
bound cells for the rows currently inside the visible window. It only learns
about data changes through explicit edit commands, collected between
`begin_updates()` and `end_updates()` and applied together in one layout pass.
Rows outside the visible window have no cell; they are bound from the data
source when asked for.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Protocol

import structlog

from apps.teams.conf import SCORE_LABEL_TEMPLATE
from apps.teams.services.changes import (
    BatchUpdateError,
    RowDeleted,
    RowInserted,
    SectionDeleted,
    SectionInserted,
    apply_changes,
)
from apps.teams.services.snapshot import IndexPath

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from apps.teams.services.changes import Change
    from apps.teams.services.snapshot import Snapshot, TeamRow

log = structlog.get_logger(__name__).bind(component="TeamListDisplay")


@dataclass(slots=True)
class TeamCell:
    """Render data for one row."""

    team_label: str = ""
    score_label: str = ""
    flag_image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def bind_team_cell(cell: TeamCell, team: TeamRow) -> TeamCell:
    cell.team_label = team.team_name
    cell.score_label = SCORE_LABEL_TEMPLATE.format(wins=team.wins)
    cell.flag_image = team.image_name or None
    return cell


class ListDataSource(Protocol):
    @property
    def snapshot(self) -> Snapshot: ...


class TeamListDisplay:
    def __init__(
        self,
        data_source: ListDataSource,
        *,
        configure: Callable[[TeamCell, TeamRow], TeamCell] = bind_team_cell,
        visible_rows: int | None = None,
    ) -> None:
        self.data_source = data_source
        self.configure = configure
        self.layout_passes = 0
        self._layout: list[tuple[str, list[Any]]] = []
        self._cells: dict[Any, TeamCell] = {}
        self._first_visible = 0
        self._visible_count = visible_rows
        self._pending: list[Change] = []
        self._update_depth = 0

    # ---------------------------------------------------------------- structure
    def number_of_sections(self) -> int:
        return len(self._layout)

    def number_of_rows(self, section: int) -> int:
        if not 0 <= section < len(self._layout):
            return 0
        return len(self._layout[section][1])

    def title_for_section(self, section: int) -> str | None:
        if not 0 <= section < len(self._layout):
            return None
        return self._layout[section][0]

    def index_paths(self) -> list[IndexPath]:
        return [
            IndexPath(s, r)
            for s, (_, keys) in enumerate(self._layout)
            for r in range(len(keys))
        ]

    def layout(self) -> list[tuple[str, list[Any]]]:
        return [(title, list(keys)) for title, keys in self._layout]

    def _key_at(self, path: IndexPath) -> Any:
        if not 0 <= path.section < len(self._layout):
            return None
        keys = self._layout[path.section][1]
        if not 0 <= path.row < len(keys):
            return None
        return keys[path.row]

    # ---------------------------------------------------------------- visibility
    def set_visible_rows(self, first: int = 0, count: int | None = None) -> None:
        """Scrolls the window to rows [first, first + count) of the flattened list."""
        self._first_visible = max(first, 0)
        self._visible_count = count
        self._layout_pass()

    def visible_index_paths(self) -> list[IndexPath]:
        paths = self.index_paths()
        end = None if self._visible_count is None else self._first_visible + self._visible_count
        return paths[self._first_visible : end]

    def is_visible(self, path: IndexPath) -> bool:
        return path in self.visible_index_paths()

    def visible_cell(self, path: IndexPath) -> TeamCell | None:
        """The bound cell at *path* if that row is on screen, else None."""
        key = self._key_at(path)
        if key is None:
            return None
        return self._cells.get(key)

    # ---------------------------------------------------------------- cells
    def _bind(self, key: Any, path: IndexPath) -> TeamCell:
        source = self.data_source.snapshot
        current = source.index_path_for(key)
        return self.configure(TeamCell(), source.object_at(current or path))

    def cell_for_row(self, path: IndexPath) -> TeamCell:
        key = self._key_at(path)
        if key is None:
            msg = f"No row at {path}."
            raise IndexError(msg)
        if (cell := self._cells.get(key)) is not None:
            return cell
        return self._bind(key, path)

    def rendered(self) -> list[dict[str, Any]]:
        return [
            {
                "title": title,
                "rows": [self.cell_for_row(IndexPath(s, r)).to_dict() for r in range(len(keys))],
            }
            for s, (title, keys) in enumerate(self._layout)
        ]

    # ---------------------------------------------------------------- full redraw
    def reload_data(self) -> None:
        self._layout = self.data_source.snapshot.layout()
        self._cells.clear()
        self._layout_pass()

    # ---------------------------------------------------------------- batch updates
    def begin_updates(self) -> None:
        self._update_depth += 1

    def end_updates(self) -> None:
        if self._update_depth == 0:
            msg = "end_updates() called without a matching begin_updates()."
            raise BatchUpdateError(msg)
        self._update_depth -= 1
        if self._update_depth == 0:
            self._commit()

    def insert_sections(self, indexes: Iterable[int]) -> None:
        self._enqueue(SectionInserted(index, "") for index in indexes)

    def delete_sections(self, indexes: Iterable[int]) -> None:
        self._enqueue(SectionDeleted(index, self.title_for_section(index) or "") for index in indexes)

    def insert_rows(self, paths: Iterable[IndexPath]) -> None:
        self._enqueue(RowInserted(None, path) for path in paths)

    def delete_rows(self, paths: Iterable[IndexPath]) -> None:
        self._enqueue(RowDeleted(self._key_at(path), path) for path in paths)

    def _enqueue(self, changes: Iterable[Change]) -> None:
        self._pending.extend(changes)
        if self._update_depth == 0:
            self._commit()

    def _commit(self) -> None:
        pending, self._pending = self._pending, []
        if pending:
            source = self.data_source.snapshot
            new_layout = apply_changes(self._layout, pending, source)

            # Inserted rows, including the landing side of a move, get a fresh cell.
            for change in pending:
                if isinstance(change, RowInserted):
                    self._cells.pop(source.object_at(change.new_path).pk, None)
                elif isinstance(change, SectionInserted):
                    for row in source.sections[change.index].objects:
                        self._cells.pop(row.pk, None)
            self._layout = new_layout
        self._layout_pass()
        log.debug("display_updated", edits=len(pending), layout_passes=self.layout_passes)

    def _layout_pass(self) -> None:
        self.layout_passes += 1
        visible_keys = set()
        for path in self.visible_index_paths():
            key = self._key_at(path)
            visible_keys.add(key)
            if key not in self._cells:
                self._cells[key] = self._bind(key, path)
        for key in list(self._cells):
            if key not in visible_keys:
                del self._cells[key]
