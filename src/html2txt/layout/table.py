from __future__ import annotations

from typing import List, Optional

from .stack import TableCell


Layout = List[List[Optional[TableCell]]]


def _get_row(matrix: Layout, index: int) -> List[Optional[TableCell]]:
    while len(matrix) <= index:
        matrix.append([])
    return matrix[index]


def _pad(row: List, index: int) -> None:
    while len(row) <= index:
        row.append(None)


def _find_first_vacant_index(row: List[Optional[TableCell]], x: int = 0) -> int:
    while x < len(row) and row[x] is not None:
        x += 1
    return x


def _put_cell_into_layout(cell: TableCell, layout: Layout, base_row: int, base_col: int) -> None:
    for r in range(cell.rowspan):
        layout_row = _get_row(layout, base_row + r)
        for c in range(cell.colspan):
            _pad(layout_row, base_col + c)
            layout_row[base_col + c] = cell


def _transpose_in_place(matrix: Layout, max_size: int) -> None:
    for i in range(max_size):
        row_i = _get_row(matrix, i)
        for j in range(i):
            row_j = _get_row(matrix, j)
            _pad(row_i, j)
            _pad(row_j, i)
            row_i[j], row_j[i] = row_j[i], row_i[j]


def _get_or_init_offset(offsets: List[int], index: int) -> int:
    # offsets[0] is always 0, missing ones sit one past their predecessor
    while len(offsets) <= index:
        offsets.append(offsets[-1] + 1)
    return offsets[index]


def _update_offset(offsets: List[int], base: int, span: int, value: int) -> None:
    offsets[base + span] = max(
        _get_or_init_offset(offsets, base + span),
        _get_or_init_offset(offsets, base) + value,
    )


def _ensure_line(output_lines: List[Optional[str]], index: int) -> None:
    while len(output_lines) <= index:
        output_lines.append(None)


def table_to_string(rows: List[List[TableCell]], row_spacing: int = 0, col_spacing: int = 3) -> str:
    """Render rows of cells as a monospace grid.

    Cells may span several rows or columns. Each column starts right after
    the widest cell text of the previous column plus ``col_spacing``, and each
    row starts below the tallest cell of the previous row plus ``row_spacing``.
    """
    layout: Layout = []
    col_number = 0
    row_number = len(rows)
    row_offsets = [0]

    for j in range(row_number):
        layout_row = _get_row(layout, j)
        x = 0
        for cell in rows[j]:
            x = _find_first_vacant_index(layout_row, x)
            _put_cell_into_layout(cell, layout, j, x)
            x += cell.colspan
            cell.lines = cell.text.split("\n")
            cell.rendered = False
            _update_offset(row_offsets, j, cell.rowspan, len(cell.lines) + row_spacing)
        col_number = max(col_number, len(layout_row))

    _transpose_in_place(layout, max(row_number, col_number))

    output_lines: List[Optional[str]] = []
    col_offsets = [0]
    for x in range(col_number):
        column = layout[x]
        rows_in_this_column = min(row_number, len(column))
        y = 0
        while y < rows_in_this_column:
            cell = column[y]
            if cell is None:
                line_offset = _get_or_init_offset(row_offsets, y)
                _ensure_line(output_lines, line_offset)
                if output_lines[line_offset] is None:
                    output_lines[line_offset] = ""
                y += 1
                continue
            if not cell.rendered:
                cell_width = 0
                col_offset = _get_or_init_offset(col_offsets, x) if len(col_offsets) > x else 0
                for k, line in enumerate(cell.lines):
                    line_offset = _get_or_init_offset(row_offsets, y) + k
                    _ensure_line(output_lines, line_offset)
                    output_lines[line_offset] = (output_lines[line_offset] or "").ljust(col_offset) + line
                    cell_width = max(cell_width, len(line))
                _update_offset(col_offsets, x, cell.colspan, cell_width + col_spacing)
                cell.rendered = True
            y += cell.rowspan
    return "\n".join(line or "" for line in output_lines)
