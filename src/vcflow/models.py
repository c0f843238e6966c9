"""Data models for vcflow."""

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Result of a workflow operation."""

    OK = "ok"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"  # Several matches, none chosen
    REJECTED = "rejected"  # Invalid input, nothing was changed
    UNKNOWN_HOST = "unknown_host"
    BACKEND_ERROR = "backend_error"

    @property
    def exit_code(self) -> int:
        """Process exit code for this outcome.

        User-input mismatches are not failures, only git errors are.
        """
        return 1 if self is Outcome.BACKEND_ERROR else 0


class BranchScope(str, Enum):
    """Kind of work a sprint branch holds."""

    BUG = "bug"
    INSTANT = "instant"
    STORY = "story"


@dataclass(frozen=True)
class ParsedBranch:
    """A branch name following the sprint_<N>/[bug|instant/]<title> convention."""

    sprint: int
    scope: BranchScope
    title: str
    ticket: int | None = None

    @property
    def is_ticket_story(self) -> bool:
        """Check if this is ticket work based on the sprint release branch."""
        return self.scope == BranchScope.STORY and self.ticket is not None
