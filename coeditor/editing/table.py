"""CSV to table conversion for the "Convert to Table" action.

Runs entirely in the editor: no provider is involved.
"""

import html
import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TableCell:
    text: str
    header: bool = False


@dataclass(frozen=True)
class TableRow:
    cells: tuple[TableCell, ...]


@dataclass(frozen=True)
class TableNode:
    """A table ready to be inserted into the document."""

    rows: tuple[TableRow, ...] = field(default_factory=tuple)

    @property
    def has_header(self) -> bool:
        return bool(self.rows) and all(cell.header for cell in self.rows[0].cells)

    @property
    def column_count(self) -> int:
        return max((len(row.cells) for row in self.rows), default=0)

    def to_html(self) -> str:
        """Render the table as table/thead/tbody/tr/th/td markup."""
        body_rows = self.rows
        parts = ["<table>"]

        if self.has_header:
            header_cells = "".join(
                f"<th>{html.escape(c.text)}</th>" for c in self.rows[0].cells
            )
            parts.append(f"<thead><tr>{header_cells}</tr></thead>")
            body_rows = self.rows[1:]

        parts.append("<tbody>")
        for row in body_rows:
            cells = "".join(f"<td>{html.escape(c.text)}</td>" for c in row.cells)
            parts.append(f"<tr>{cells}</tr>")
        parts.append("</tbody></table>")

        return "".join(parts)


def build_table_from_csv(csv: str) -> TableNode:
    """Build a table from comma-separated lines.

    Blank lines are dropped and short rows are padded with empty cells.
    The first row becomes a header row only when there is more than one row.
    """
    lines = [line.strip() for line in re.split(r"\r?\n", csv)]
    rows = [[cell.strip() for cell in line.split(",")] for line in lines if line]
    cols = max((len(r) for r in rows), default=0)

    use_header = len(rows) > 1

    return TableNode(
        rows=tuple(
            TableRow(
                cells=tuple(
                    TableCell(text=text, header=use_header and idx == 0)
                    for text in row + [""] * (cols - len(row))
                )
            )
            for idx, row in enumerate(rows)
        )
    )
