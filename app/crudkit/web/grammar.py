import re

_ACRONYMS = {"id", "url", "html", "ip", "api"}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def humanize(identifier: str) -> str:
    """Turn ``first_name`` or ``firstName`` into ``First Name``."""
    text = _CAMEL_BOUNDARY.sub(" ", str(identifier))
    words = [word for word in re.split(r"[\s_\-]+", text) if word]
    return " ".join(word.upper() if word.lower() in _ACRONYMS else word[:1].upper() + word[1:].lower() for word in words)
