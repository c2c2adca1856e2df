from __future__ import annotations

import html


def decode_html_entities(text: str, *, passes: int = 1) -> str:
    """Decode numeric and named character references.

    Caption payloads escape entities a second time, so callers pass
    ``passes=2`` for them. Text without references comes back unchanged.
    """
    decoded = text
    for _ in range(max(1, passes)):
        if "&" not in decoded:
            break
        decoded = html.unescape(decoded)
    return decoded
