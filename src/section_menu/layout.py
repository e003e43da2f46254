"""Word wrapping and centering for fixed-width terminal blocks.

Multi-line blocks such as the footer are painted upward from a fixed
bottom row, so ``layout`` reports how many lines it produced and
``anchor_row`` turns that into the row of the first line.
"""

from __future__ import annotations


def center_string(text: str, width: int) -> str:
    """Left-pad text so it sits in the middle of width columns."""
    if not text or len(text) >= width:
        return text
    padding = max(0, (width - len(text)) // 2)
    return " " * padding + text


def layout(text: str, width: int, center: bool = True) -> tuple[str, int]:
    """Wrap and center text to width columns.

    Explicit newlines always start a new line (blank lines are kept). A line
    that grows past width is broken at its last space; a single word wider
    than width is emitted whole on its own line rather than split.

    Args:
        text: Text to lay out.
        width: Target column width.
        center: When False the text is returned untouched as one line.

    Returns:
        Tuple of (wrapped text joined by newlines, number of lines).
    """
    if not center:
        return text, 1

    lines: list[str] = []
    current = ""

    for char in text:
        if char == "\n":
            lines.append(center_string(current, width))
            current = ""
            continue

        current += char
        if len(current) <= width:
            continue

        split_at = current.rfind(" ")
        if split_at == -1:
            # No break point yet; keep accumulating until one shows up.
            continue
        head, current = current[:split_at], current[split_at + 1 :]
        if head:
            lines.append(center_string(head, width))

    if current:
        lines.append(center_string(current, width))

    return "\n".join(lines), len(lines)


def anchor_row(bottom_row: int, line_count: int) -> int:
    """Return the first row of a block whose last line sits on bottom_row."""
    return bottom_row - (max(1, line_count) - 1)
