"""Path template resolution.

Two placeholder dialects are understood: the plain ``{name}`` form and the
Google API ``{name=pattern}`` form, where only ``name`` is used for lookup.
Values are percent-encoded except for ``/`` so hierarchical resource names
such as ``people/c123`` survive intact.
"""

import logging
import re
from typing import Any, Mapping, Set
from urllib.parse import quote

GOOGLE_PLACEHOLDER = re.compile(r"\{(\w+)=[^}]*\}")
PLACEHOLDER = re.compile(r"\{(\w+)\}")

DEFAULT_USER_ID = "me"

logger = logging.getLogger(__name__)


def encode_path_value(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="/")


def build_path(template: str, params: Mapping[str, Any]) -> str:
    """Substitute ``params`` into ``template``

    Placeholders without a matching parameter are left untouched, except
    ``userId`` which falls back to ``me``.
    """
    resolved: Set[str] = set()

    def _google(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in params:
            resolved.add(name)
            return encode_path_value(params[name])
        if name == "userId":
            resolved.add(name)
            return DEFAULT_USER_ID
        return match.group(0)

    def _standard(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in resolved:
            return match.group(0)
        if name in params:
            return encode_path_value(params[name])
        if name == "userId":
            return DEFAULT_USER_ID
        return match.group(0)

    path = GOOGLE_PLACEHOLDER.sub(_google, template)
    path = PLACEHOLDER.sub(_standard, path)
    logger.debug(f"[PathBuilder] {template} -> {path}")
    return path


__all__ = [
    "build_path",
    "encode_path_value",
    "DEFAULT_USER_ID",
]
