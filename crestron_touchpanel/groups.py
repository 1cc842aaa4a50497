"""
Selection of the property groups that are fetched and reported each cycle.
"""

import re
from typing import Iterable, List, Optional

from . import const
from .logging import get_logger

logger = get_logger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def _normalize(token: str) -> str:
    return _NON_ALPHANUMERIC.sub("", token).lower()


_SUPPORTED_BY_KEY = {_normalize(group): group for group in const.SUPPORTED_GROUPS}


class PropertyGroupSelection:
    """
    Ordered set of enabled property groups.

    Group names come from a fixed vocabulary (``const.SUPPORTED_GROUPS``). The
    ``AdapterMetadata`` group is always enabled and is not stored in the selection.

    Args:
        groups: Initial groups. Defaults to ``General`` only. An empty iterable
                is accepted and yields metadata-only output.
    """

    def __init__(self, groups: Optional[Iterable[str]] = None):
        if groups is None:
            groups = [const.GENERAL_GROUP]
        self._groups: List[str] = []
        for group in groups:
            canonical = _SUPPORTED_BY_KEY.get(_normalize(group))
            if canonical is None:
                raise ValueError(f"Unsupported property group: {group}")
            if canonical not in self._groups:
                self._groups.append(canonical)

    @property
    def groups(self) -> List[str]:
        return list(self._groups)

    def __str__(self) -> str:
        return ",".join(self._groups)

    def __contains__(self, group: str) -> bool:
        return self.is_group_enabled(group)

    def is_group_enabled(self, group: str) -> bool:
        """True when ``group`` is selected (directly or via ``All``) or is the metadata group."""
        if group == const.ADAPTER_METADATA_GROUP:
            return True
        return group in self._groups

    def update(self, value: Optional[str]) -> None:
        """
        Replace the selection from a comma-separated string.

        Tokens are trimmed and matched case-insensitively, ignoring punctuation, so
        ``system-versions`` selects ``SystemVersions``. ``All`` selects every group.
        Unknown tokens are dropped with a warning. When nothing valid remains the
        current selection is kept.
        """
        if value is None or not value.strip():
            return

        tokens = [token.strip() for token in value.split(",") if token.strip()]
        if any(token.lower() == const.ALL_GROUPS.lower() for token in tokens):
            self._groups = list(const.SUPPORTED_GROUPS)
            return

        selected = []
        unknown = []
        for token in tokens:
            canonical = _SUPPORTED_BY_KEY.get(_normalize(token))
            if canonical is None:
                unknown.append(token)
            elif canonical not in selected:
                selected.append(canonical)

        if unknown:
            logger.warning(
                f"Ignoring unsupported property groups: {', '.join(unknown)}. "
                f"Supported groups: {', '.join(const.SUPPORTED_GROUPS)}, {const.ALL_GROUPS}")

        if not selected:
            logger.warning(
                f"No supported property group in '{value}', keeping: {self}")
            return

        self._groups = selected
