"""Plain-text rendering of cell values.

Used to derive the display text cached inside a relinked link value, which
the store shows until it recomputes the link's text itself.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any


def cell_text(value: Any) -> str:
    """Render a raw cell value as text.

    Objects with a ``text`` attribute render as that text; sequences render as
    their items' texts joined with ", "; booleans as Yes/No.

    Args:
        value: Raw cell value in any store shape.

    Returns:
        str: Display text, empty for missing values.

    Example:
        >>> cell_text([{"id": "opt1", "text": "Red"}, {"id": "opt2", "text": "Blue"}])
        'Red, Blue'
        >>> cell_text({"recordIds": ["rec1"], "text": "Order 7"})
        'Order 7'
    """
    if value is None:
        return ""
    if isinstance(value, Mapping):
        if "text" in value:
            text = value["text"]
            return text if isinstance(text, str) else cell_text(text)
        return json.dumps(value, ensure_ascii=False, default=str)
    if isinstance(value, (list, tuple)):
        texts = []
        for item in value:
            if isinstance(item, Mapping) and "text" in item:
                texts.append(cell_text(item["text"]))
            elif isinstance(item, str):
                texts.append(item)
            else:
                texts.append(cell_text(item))
        return ", ".join(t for t in texts if t)
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
