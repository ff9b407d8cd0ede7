"""Fixed-width table rendering."""

from typing import List, Sequence

COLUMN_SEPARATOR = ' | '
RULE_SEPARATOR = '-+-'


def column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Width of the widest cell in each column, header row included."""
    return [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]


def format_row(row: Sequence[str], widths: Sequence[int]) -> str:
    """Left-align the first column and right-align the rest."""
    cells = [
        cell.ljust(width) if index == 0 else cell.rjust(width)
        for index, (cell, width) in enumerate(zip(row, widths))
    ]
    return COLUMN_SEPARATOR.join(cells)


def format_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """
    Render a header and data rows as an aligned text table.

    Example:
        >>> print(format_table(['Name', 'Size'], [['a.out', '12']]))
        Name  | Size
        ------+-----
        a.out |   12

    Returns:
        Table text without a trailing newline
    """
    all_rows = [list(header)] + [list(row) for row in rows]
    widths = column_widths(all_rows)
    lines = [format_row(all_rows[0], widths)]
    lines.append(RULE_SEPARATOR.join('-' * width for width in widths))
    lines.extend(format_row(row, widths) for row in all_rows[1:])
    return '\n'.join(lines)
