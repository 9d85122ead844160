# installations.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from .model import GradleInstallation

InstallationSnapshot = Tuple[GradleInstallation, ...]


def find_installation(
    installations: Iterable[GradleInstallation],
    name: Optional[str],
) -> Optional[GradleInstallation]:
    """First installation named exactly `name`, or None (also for an unset name)."""
    if not name:
        return None
    for inst in installations:
        if inst.name == name:
            return inst
    return None


def _coerce(items: Iterable[Any]) -> InstallationSnapshot:
    out = []
    for item in items:
        if isinstance(item, GradleInstallation):
            out.append(item)
        elif isinstance(item, Mapping):
            out.append(GradleInstallation.from_dict(item))
        else:
            raise TypeError(f"Not an installation: {item!r}")
    return tuple(out)


class InstallationStore:
    """
    Owner of the configured installations.

    The list is an immutable tuple. `replace` swaps in a whole new tuple, so a
    reader holding `installations` keeps a consistent view even while the
    configuration is being saved.
    """

    def __init__(
        self,
        installations: Iterable[Any] = (),
        *,
        persist: Optional[Callable[[InstallationSnapshot], None]] = None,
    ):
        self._installations: InstallationSnapshot = _coerce(installations)
        self._persist = persist

    @property
    def installations(self) -> InstallationSnapshot:
        return self._installations

    def get(self, name: Optional[str]) -> Optional[GradleInstallation]:
        return find_installation(self._installations, name)

    def replace(self, *installations: Any) -> None:
        self._installations = _coerce(installations)
        if self._persist is not None:
            self._persist(self._installations)

    def convert(self, old_property_bag: Mapping[str, Any]) -> None:
        """Adopt installations from data saved by an older release, if any."""
        if "installations" in old_property_bag:
            self._installations = _coerce(old_property_bag["installations"] or ())


# ----------------------------------------------------------------------
# JSON persistence (used by the CLI host)
# ----------------------------------------------------------------------

def save_installations(path: str | Path, installations: InstallationSnapshot) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = [inst.to_dict() for inst in installations]
    p.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def load_store(path: str | Path) -> InstallationStore:
    """
    Load a store backed by a JSON file; saving writes the file back.

    The file holds a list of {"name", "home"} objects. An object with an
    "installations" key is the older property-bag layout and is converted.
    A missing file gives an empty store.
    """
    p = Path(path)
    store = InstallationStore(persist=lambda snapshot: save_installations(p, snapshot))
    if not p.exists():
        return store

    data = json.loads(p.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        store.convert(data)
    elif isinstance(data, list):
        store.convert({"installations": data})
    else:
        raise ValueError(f"Invalid installations file {p}: expected a list or an object")
    return store
