"""Directory model and Slack response schemas."""

from typing import List, Optional

from pydantic import BaseModel, TypeAdapter


class DirectoryEntry(BaseModel):
    """One workspace member that can receive a share."""

    id: str
    team: str
    name: str


Directory = List[DirectoryEntry]
directory_adapter = TypeAdapter(Directory)


# =============================================================================
# Slack Web API responses
# =============================================================================

class SlackEnvelope(BaseModel):
    """Fields every Slack Web API response carries."""

    ok: bool
    error: Optional[str] = None


class Profile(BaseModel):
    real_name: str


class Member(BaseModel):
    id: str
    team_id: str
    deleted: bool = False
    profile: Profile

    def to_entry(self) -> DirectoryEntry:
        return DirectoryEntry(id=self.id, team=self.team_id, name=self.profile.real_name)


class UsersListResponse(SlackEnvelope):
    members: List[Member]
