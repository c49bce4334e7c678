from __future__ import annotations

from typing import Any, Sequence

from starlette.requests import Request

from app.crudkit.core.error_catalog import AppError, ErrorCatalog


_CAST_ALIASES: dict[str, type] = {
    "str": str,
    "string": str,
    "int": int,
    "integer": int,
    "float": float,
    "bool": bool,
    "boolean": bool,
    "list": list,
    "array": list,
}

_FALSE_VALUES = {"", "0", "false", "f", "no", "n", "off"}


def resolve_cast(cast_to: str | type | None) -> type | None:
    if cast_to is None:
        return None
    if isinstance(cast_to, type) and cast_to in {str, int, float, bool, list}:
        return cast_to
    if isinstance(cast_to, str) and cast_to.lower() in _CAST_ALIASES:
        return _CAST_ALIASES[cast_to.lower()]
    raise AppError(ErrorCatalog.INVALID_CAST_TYPE, details={"cast_to": str(cast_to)})


def cast_value(value: Any, cast: type, default: Any = None) -> Any:
    if value is None:
        return None
    if cast is bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() not in _FALSE_VALUES
    if cast is list:
        if isinstance(value, (list, tuple)):
            return list(value)
        text = str(value)
        return text.split(",") if text else []
    if cast in (int, float):
        try:
            return cast(str(value).strip())
        except ValueError:
            if default is not None:
                return default
            return cast()
    return str(value)


class RequestReader:
    def __init__(self, request: Request):
        self._params = request.query_params

    def has(self, name: str) -> bool:
        return name in self._params

    def get(self, name: str, cast_to: str | type | None = None, default: Any = None) -> Any:
        cast = resolve_cast(cast_to)

        if name not in self._params:
            value = default
        elif cast is list:
            values = self._params.getlist(name)
            value = values if len(values) > 1 else values[0]
        else:
            value = self._params.get(name)

        if cast is None:
            if value == "":
                return default
            return value
        return cast_value(value, cast, default)

    def get_valid(self, name: str, valid_values: Sequence[Any]) -> Any:
        valid_values = list(valid_values)
        if not valid_values:
            raise AppError(ErrorCatalog.INVALID_VALID_VALUES, details={"name": name})

        value = self.get(name)
        if value is None:
            return valid_values[0]
        for valid_value in valid_values:
            if str(valid_value) == str(value):
                return valid_value
        return valid_values[0]
