"""Parsing of the object list a client advertises when it registers.

LWM2M clients send CoRE link format (``</1>;ver=1.1,</3/0>,</4/0>``); some
gateways forward plain path lists (``/3/0 /4/0``). Both reduce to the list of
object paths the device serves.
"""

from __future__ import annotations

import re
from typing import List, Optional

_SEPARATORS = re.compile(r"[,\s]+")
_LINK = re.compile(r"<([^>]*)>")


def _object_path(token: str) -> Optional[str]:
    match = _LINK.search(token)
    path = match.group(1) if match else token.split(";", 1)[0]
    path = path.strip().rstrip("/")
    if not path.startswith("/") or len(path) < 2:
        return None
    return path


def parse_object_uri_list(payload: Optional[str]) -> List[str]:
    """Returns advertised object paths in first-seen order, without duplicates."""
    if not payload:
        return []

    paths: List[str] = []
    seen = set()
    for token in _SEPARATORS.split(payload.strip()):
        if not token:
            continue
        path = _object_path(token)
        if path is None or path in seen:
            continue
        seen.add(path)
        paths.append(path)
    return paths
