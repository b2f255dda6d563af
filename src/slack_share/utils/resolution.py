"""Recipient Resolution."""

import re
from typing import Dict, Optional

from ..models import Directory, DirectoryEntry

SLACK_ID_PATTERN = re.compile(r"^[UWCDG][A-Z0-9]{8,}$")


class ResolutionError(ValueError):
    """A recipient name matched nothing, or more than one member."""


def is_slack_id(value: str) -> bool:
    return bool(SLACK_ID_PATTERN.match(value))


def as_mapping(directory: Directory) -> Dict[str, DirectoryEntry]:
    """Index a Directory by display name. Later entries win on duplicate names."""
    return {entry.name: entry for entry in directory}


def find_by_id(directory: Directory, entry_id: str) -> Optional[DirectoryEntry]:
    for entry in directory:
        if entry.id == entry_id:
            return entry
    return None


def resolve_recipient(directory: Directory, name_or_id: str) -> DirectoryEntry:
    """
    Find the member a share should go to.

    Accepts a member ID or a display name (case-insensitive, leading @
    ignored). Raises ResolutionError if the name is unknown or ambiguous.
    """
    target = name_or_id.strip()
    if is_slack_id(target):
        entry = find_by_id(directory, target)
        if entry:
            return entry

    name = target.lstrip("@").lower()
    matches = [entry for entry in directory if entry.name.lower() == name]

    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        ids = ", ".join(f"{m.name} ({m.id})" for m in matches[:5])
        raise ResolutionError(f"Ambiguous name '{target}' matches: {ids}{'...' if len(matches) > 5 else ''}")

    candidates = sorted(entry.name for entry in directory if name and name in entry.name.lower())
    hint = f" Did you mean: {', '.join(candidates[:5])}?" if candidates else ""
    raise ResolutionError(f"No user named '{target}'.{hint}")
