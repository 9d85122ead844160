# macro.py
from __future__ import annotations

import re
from typing import Callable, Mapping, Optional, Union

# $NAME or ${NAME}; dots are only allowed inside braces
VARIABLE = re.compile(r"\$([A-Za-z0-9_]+|\{[A-Za-z0-9_.]+\})")

Resolver = Union[Mapping[str, str], Callable[[str], Optional[str]]]


def _lookup(resolver: Resolver) -> Callable[[str], Optional[str]]:
    if isinstance(resolver, Mapping):
        return resolver.get
    return resolver


def replace_macro(text: Optional[str], resolver: Resolver) -> Optional[str]:
    """
    Replace `$NAME` and `${NAME}` in `text` with values from `resolver`.

    Unknown names are left as they are. Substituted values are not scanned
    again, so a value containing `$X` stays literal.
    """
    if text is None:
        return None
    lookup = _lookup(resolver)

    def _sub(m: re.Match) -> str:
        key = m.group(1)
        if key.startswith("{"):
            key = key[1:-1]
        value = lookup(key)
        return m.group(0) if value is None else str(value)

    return VARIABLE.sub(_sub, text)
