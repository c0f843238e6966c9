"""vcflow - git with shorthand branch workflows.

Sprint and ticket aware branch creation, search, merging and pull requests
on top of plain git.
"""

__version__ = "0.1.0"

from vcflow.engine import WorkflowEngine, create_engine
from vcflow.models import Outcome, ParsedBranch

__all__ = [
    "__version__",
    "WorkflowEngine",
    "create_engine",
    "Outcome",
    "ParsedBranch",
]
