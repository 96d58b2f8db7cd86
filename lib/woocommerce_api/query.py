from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

# URI-reserved characters survive so bracket keys and the & / = structure stay readable.
_QUERY_SAFE = "/?:@&=+$,;[]!*'()"


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_query(data: Mapping[str, Any] | None) -> list[str]:
    """Flatten nested query data into ``key=value`` strings using bracket notation.

    ``{"a": 1, "b": {"x": 2}, "c": [3, 4]}`` becomes
    ``["a=1", "b[x]=2", "c[]=3", "c[]=4"]``. Iteration order is preserved.
    """
    if not data:
        return []
    out: list[str] = []
    for key, value in data.items():
        if isinstance(value, Mapping):
            out.extend(f"{key}[{inner_key}]={_scalar(inner)}" for inner_key, inner in value.items())
        elif isinstance(value, (list, tuple)):
            out.extend(f"{key}[]={_scalar(inner)}" for inner in value)
        else:
            out.append(f"{key}={_scalar(value)}")
    return out


def add_query_params(endpoint: str, data: Mapping[str, Any] | None) -> str:
    entries = flatten_query(data)
    if not entries:
        return endpoint

    if "?" not in endpoint:
        endpoint += "?"
    if not endpoint.endswith(("?", "&")):
        endpoint += "&"
    return endpoint + quote("&".join(entries), safe=_QUERY_SAFE)
