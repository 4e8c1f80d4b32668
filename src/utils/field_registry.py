"""Per-render store of the values typed into the placeholder form."""

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from src.utils.exceptions import UnknownFieldError
from src.utils.placeholder_scanner import ScanResult

logger = logging.getLogger(__name__)


class FieldRegistry:
    """
    Holds the current value of every scalar field found in a template.

    Keys are fixed when the registry is created from a scan; values start
    empty. The registry is owned by whoever renders the document (one per
    Streamlit session or CLI run) and has no timing or persistence behavior.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._values: Dict[str, str] = {name: "" for name in names}

    @classmethod
    def from_scan(cls, scan_result: ScanResult) -> "FieldRegistry":
        return cls(scan_result.field_names)

    def get(self, name: str, default: str = "") -> str:
        return self._values.get(name, default)

    def set(self, name: str, value: Optional[str]) -> None:
        if name not in self._values:
            raise UnknownFieldError("Unknown placeholder", name)
        self._values[name] = "" if value is None else str(value)

    def update(self, values: Mapping[str, Optional[str]]) -> None:
        """Bulk assignment, e.g. when restoring a draft. Unknown names are skipped."""
        for name, value in values.items():
            if name not in self._values:
                logger.debug(f"Ignoring value for unknown placeholder '{name}'")
                continue
            self.set(name, value)

    def entries(self) -> List[Tuple[str, str]]:
        return list(self._values.items())

    def names(self) -> List[str]:
        return list(self._values)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FieldRegistry({self._values!r})"
