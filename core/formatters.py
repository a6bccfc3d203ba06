# core/formatters.py

# all pure text utilities
# must never import from models!

from typing import Any

PLACEHOLDER = "-"

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_optional(value: Any, placeholder: str = PLACEHOLDER) -> str:
    return placeholder if value in (None, "") else str(value)


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text

    return text[: width - 1] + "…"


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """
    Renders rows as a left-aligned, pipe-separated text table sized to its widest cells.
    """
    widths = [len(h) for h in headers]

    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def format_row(cells: list[str]) -> str:
        return " | ".join(f"{cell:<{widths[i]}}" for i, cell in enumerate(cells))

    divider = "-+-".join("-" * w for w in widths)

    return "\n".join([format_row(headers), divider, *map(format_row, rows)])
