import html
from typing import Any


def encode(value: Any) -> str:
    """Escape a value for use inside an HTML attribute or URL."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def prepare(text: Any) -> str:
    """Escape text for use in an element body. Quotes are left as written."""
    if text is None:
        return ""
    return html.escape(str(text), quote=False)
