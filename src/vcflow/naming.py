"""Branch naming conventions for vcflow.

Sprint branches look like::

    sprint_70/SS-1234_Login_page
    sprint_70/bug/SS-1240_Crash_on_save
    sprint_70/instant/Hotfix

and are based on ``release/sprint_70`` (stories) or the main branch
(bugs and instants).
"""

import re

from vcflow.models import BranchScope, ParsedBranch


SPRINT_BRANCH_PATTERN = re.compile(r"^sprint_(\d+)/(?:(bug|instant)/)?(.+)$")


def sanitize_branch_name(text: str) -> str:
    """Turn free text into a branch name.

    Ampersands become "and" and whitespace runs become a single underscore.
    """
    return "_".join(text.replace("&", " and ").split())


def parse_branch_name(name: str, ticket_prefix: str = "SS") -> ParsedBranch | None:
    """Parse a sprint branch name, returns None if it doesn't follow the convention."""
    match = SPRINT_BRANCH_PATTERN.match(name.strip())
    if not match:
        return None

    sprint, scope, title = match.groups()

    ticket = None
    ticket_match = re.match(rf"{re.escape(ticket_prefix)}-(\d+)_", title)
    if ticket_match:
        ticket = int(ticket_match.group(1))

    return ParsedBranch(
        sprint=int(sprint),
        scope=BranchScope(scope) if scope else BranchScope.STORY,
        title=title,
        ticket=ticket,
    )


def sprint_branch_name(sprint: int | str, scope: BranchScope, title: str) -> str:
    """Build a sprint branch name."""
    if scope == BranchScope.STORY:
        return f"sprint_{sprint}/{title}"
    return f"sprint_{sprint}/{scope.value}/{title}"
