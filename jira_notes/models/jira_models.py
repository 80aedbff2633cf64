"""
Pydantic models for Jira tickets and the results of processing them.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TicketInfo(BaseModel):
    """Read-only snapshot of a Jira ticket.

    A failed fetch is represented by an instance without ``id``.
    """

    id: Optional[str] = None
    summary: str = ""
    link: str = ""
    status: str = ""
    releases: List[str] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "TicketInfo":
        return cls()

    @property
    def found(self) -> bool:
        return bool(self.id)


class ReleaseInfo(BaseModel):
    """Fix version the tickets are released under."""

    id: str
    name: str
    project_id: Optional[str] = None
    project_name: Optional[str] = None


class SprintInfo(BaseModel):
    """Sprint the tickets are moved into."""

    id: str
    name: str
    state: Optional[str] = None


class TransitionOutcome(str, Enum):
    MOVED = "moved"
    BLOCKED = "blocked"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class TransitionResult(BaseModel):
    ticket_id: str
    outcome: TransitionOutcome
    from_status: str = ""
    to_status: str = ""
    message: str = ""

    @property
    def moved(self) -> bool:
        return self.outcome is TransitionOutcome.MOVED


class AssignmentOutcome(str, Enum):
    ASSIGNED = "assigned"
    SKIPPED = "skipped"
    FAILED = "failed"


class AssignmentResult(BaseModel):
    ticket_id: str
    outcome: AssignmentOutcome
    label: Optional[str] = None
    message: str = ""


class SprintBatchResult(BaseModel):
    """Result of submitting one batch of tickets to a sprint."""

    sprint_id: str
    ticket_ids: List[str]
    outcome: AssignmentOutcome
    message: str = ""


class TicketOutcome(BaseModel):
    """Everything that happened to a single extracted ticket reference."""

    ticket_id: str
    found: bool = False
    annotated: bool = False
    transition: Optional[TransitionResult] = None
    release: Optional[AssignmentResult] = None
    message: str = ""


class RunReport(BaseModel):
    """Result of a full enrichment run."""

    text: str
    markdown: str
    environment: str
    tickets: List[TicketOutcome] = Field(default_factory=list)
    sprint_batches: List[SprintBatchResult] = Field(default_factory=list)
    release: Optional[ReleaseInfo] = None
    sprint: Optional[SprintInfo] = None

    @property
    def skipped(self) -> List[str]:
        return [ticket.ticket_id for ticket in self.tickets if not ticket.found]
