from typing import Iterable, List, Literal, Optional, Sequence

Align = Literal["l", "c", "r"]

_ALIGN_MARKS = {"l": ":---", "c": ":---:", "r": "---:"}


def money(amount: float) -> str:
    """Dollar amount with two decimals, e.g. $1,299.99."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def markdown_table(
    headers: Sequence[object],
    rows: Iterable[Sequence[object]],
    aligns: Optional[Sequence[Align]] = None,
) -> str:
    """
    Render a Markdown table for MarkdownViewer panes.

    Cells are str()-ed and pipes escaped. aligns defaults to left for every
    column and must match the header count when given.
    An empty row list still renders the header.
    """
    head: List[str] = [_cell(h) for h in headers]
    if aligns is None:
        aligns = ["l"] * len(head)
    elif len(aligns) != len(head):
        raise ValueError("Length of aligns must match number of headers.")

    lines = [
        "| " + " | ".join(head) + " |",
        "| " + " | ".join(_ALIGN_MARKS[a] for a in aligns) + " |",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(c) for c in row) + " |")
    return "\n".join(lines)


def _cell(value: object) -> str:
    return str(value).replace("|", "\\|")
