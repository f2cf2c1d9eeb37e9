"""Utility helpers for compact encoding of map rows.

Format strategy:
  - Input: one map row as a string of tile characters.
  - Consecutive runs are encoded as ``count,char`` tokens joined by ``|``
    and prefixed with an ``L:`` marker.
  - If the encoded payload is not shorter than the raw row, the raw row is
    returned.

Compressed grammar (simple):
  L:n0,c0|n1,c1|...

Limitations:
  - Tile characters must not be ``|``; commas are fine because the count is
    split off at the first comma only.
  - Decoding a malformed ``L:`` payload yields an empty string.
"""

from __future__ import annotations

from typing import List


def compress_row(row: str) -> str:
    """Return the run-length form of ``row`` or ``row`` itself if not shorter.

    Args:
        row: A map row such as ``"#####...##"``.

    Returns:
        ``L:``-prefixed run-length string, or the original row.
    """
    if not row:
        return row
    pieces = []
    run_char = row[0]
    run_len = 0
    for ch in row:
        if ch == run_char:
            run_len += 1
            continue
        pieces.append(f"{run_len},{run_char}")
        run_char, run_len = ch, 1
    pieces.append(f"{run_len},{run_char}")
    compressed = "L:" + "|".join(pieces)
    return compressed if len(compressed) < len(row) else row


def decompress_row(data: str) -> str:
    """Inverse of :func:`compress_row`.

    Input not starting with ``L:`` is returned unchanged. On parsing failure
    an empty string is returned (caller should treat it as a failed decode).
    """
    if not data or not data.startswith("L:"):
        return data
    out = []
    for token in data[2:].split("|"):
        count_s, sep, ch = token.partition(",")
        if not sep or len(ch) != 1 or not count_s.isdigit():
            return ""
        out.append(ch * int(count_s))
    return "".join(out)


def compress_rows(rows: List[str]) -> List[str]:
    return [compress_row(r) for r in rows]


def decompress_rows(rows: List[str]) -> List[str]:
    return [decompress_row(r) for r in rows]


__all__ = ["compress_row", "decompress_row", "compress_rows", "decompress_rows"]
