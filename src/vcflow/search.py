"""Branch search and selection for vcflow."""

import re
from typing import Callable

from vcflow.git import GitOperations

# Takes the candidates, returns the index of the chosen one or None
Chooser = Callable[[list[str]], int | None]


class BranchSearch:
    """Finds branches by phrase across local and remote branches."""

    def __init__(self, git: GitOperations):
        self.git = git
        self._remote_prefix = re.compile(rf"^(?:remotes/)?{re.escape(git.remote)}/")

    def search(self, phrase: str, shallow: bool = False) -> list[str]:
        """
        Search for branches whose name contains the phrase (case-insensitive).

        When nothing matches, all remotes are fetched once and the search is
        repeated shallow, so there is never more than one refresh. Remote
        prefixes are stripped and results are returned unique and sorted.
        """
        matches = self._match(phrase)

        if not matches:
            if shallow:
                return []

            self.git.fetch_all()
            return self.search(phrase, shallow=True)

        return sorted({self._remote_prefix.sub("", branch) for branch in matches})

    def _match(self, phrase: str) -> list[str]:
        """Get matching branch names from the raw listing."""
        needle = phrase.lower()
        matches = []

        for line in self.git.list_branches():
            # Skip the checked out branch and symbolic refs like HEAD -> origin/master
            if "*" in line or "->" in line:
                continue

            branch = "".join(line.split())
            if branch and needle in branch.lower():
                matches.append(branch)

        return matches


def select_branch(candidates: list[str], chooser: Chooser) -> str | None:
    """
    Pick a single branch from search results.

    A single candidate is returned as is, the chooser is only asked when there
    are several. Returns None when there is nothing to pick or nothing was picked.
    """
    options = [c.strip() for c in candidates if c and c.strip()]

    if not options:
        return None

    if len(options) == 1:
        return options[0]

    index = chooser(options)
    if index is None or not 0 <= index < len(options):
        return None

    return options[index]
