import json
from typing import Any, Callable

from rich.console import Console
from rich.table import Column, Table
from rich.text import Text

from hypestats.utils.constants import ID_FIELD, TIMESTAMP_FIELD
from hypestats.utils.exceptions import StatsTableException


class StatsTable:
    """
    Helper class to create a Rich table for summary outputs on the CLI.
    Additionally supports functions on a per-cell basis to conditionally
    stylize a columns' cell data base on its value.
    """

    def __init__(
        self,
        title: str,
        columns: list[Column],
        cell_idxs_to_style_fns: dict[int, Callable[[str], str]] | None = None,
        caption: str | None = None,
    ):
        cell_idxs_to_style_fns = cell_idxs_to_style_fns or {}
        self._title = title
        self._num_cols = len(columns)
        if len(cell_idxs_to_style_fns) > self._num_cols or any(
            idx < 0 or self._num_cols <= idx for idx in cell_idxs_to_style_fns.keys()
        ):
            raise StatsTableException(
                "Invalid cell_idxs_to_style_fns value. Must not contain more entries than table has columns."
            )
        self._per_row_cell_style_fns = {i: cell_idxs_to_style_fns.get(i) for i in range(self._num_cols)}
        self._table = Table(
            *columns, title=self._title, caption=caption, title_style="bold white", show_lines=True, expand=True
        )
        self._raw_rows: list[list[str]] = []

    @property
    def row_count(self) -> int:
        return len(self._raw_rows)

    def add_row(self, row: list[str]) -> None:
        if len(row) != self._num_cols:
            raise StatsTableException(
                f"Invalid row provided: length {len(row)}, but StatsTable instance has {self._num_cols} columns {row}"
            )
        stylized_row = [
            (
                cell_data
                if not self._per_row_cell_style_fns[i]
                else Text(cell_data, style=self._per_row_cell_style_fns[i](cell_data))
            )
            for i, cell_data in enumerate(row)
        ]
        self._table.add_row(*stylized_row)
        self._raw_rows.append(row)

    def add_rows(self, rows: list[list[str]]) -> None:
        for row in rows:
            self.add_row(row)

    def print_table(self, console: Console | None = None) -> None:
        (console or Console()).print(self._table)


class HypeStatsSummaryTable(StatsTable):
    """Utility subclass of StatsTable for printing the JSON-ready hype stats records fetched for today."""

    def __init__(self, records: list[dict[str, Any]], day_label: str):
        super().__init__(
            title=f"Hype Stats: {day_label}",
            columns=[
                Column(header="ID", justify="left", no_wrap=True, ratio=1),
                Column(header="Timestamp", style="cyan", no_wrap=True, ratio=1),
                Column(header="Fields", no_wrap=False, ratio=3),
            ],
            cell_idxs_to_style_fns={2: lambda fields: "white" if fields == "{}" else "magenta"},
            caption=f"{len(records)} record(s) timestamped since the start of the day.",
        )
        self.add_rows([_record_to_row(record) for record in records])


def _record_to_row(record: dict[str, Any]) -> list[str]:
    extra_fields = {k: v for k, v in record.items() if k not in (ID_FIELD, TIMESTAMP_FIELD)}
    return [str(record.get(ID_FIELD, "N/A")), str(record.get(TIMESTAMP_FIELD, "N/A")), json.dumps(extra_fields)]
