"""Branch workflows for vcflow."""

from typing import Callable

from vcflow import display
from vcflow.config import Settings, load_settings
from vcflow.git import GitOperations, GitError
from vcflow.models import BranchScope, Outcome
from vcflow.naming import parse_branch_name, sanitize_branch_name, sprint_branch_name
from vcflow.pullrequest import build_body, build_endpoint, open_url
from vcflow.search import BranchSearch, Chooser, select_branch


class WorkflowEngine:
    """
    Higher level branch workflows built on top of plain git operations.

    Every workflow returns an Outcome. User mistakes (unknown branches,
    identical merge branches) are reported and return a non-error outcome,
    git failures raise GitError unless the workflow has cleanup to do.
    """

    def __init__(
        self,
        git: GitOperations,
        settings: Settings,
        chooser: Chooser = display.prompt_branch_choice,
        opener: Callable[[str], bool] = open_url,
    ):
        self.git = git
        self.settings = settings
        self.chooser = chooser
        self.opener = opener
        self.searcher = BranchSearch(git)

    # Branches

    def current_branch(self) -> str:
        return self.git.current_branch

    def search(self, phrase: str, shallow: bool = False) -> list[str]:
        return self.searcher.search(phrase, shallow=shallow)

    def checkout(self, name: str) -> Outcome:
        """Checkout a branch, falling back to a search when it doesn't exist."""
        try:
            self.git.fetch(name)
        except GitError:
            pass  # Not on the remote, it may still exist locally

        if self.git.branch_exists(name):
            self.git.checkout(name)
            display.print_switched(name)
            return Outcome.OK

        candidates = self.search(name)
        branch = select_branch(candidates, self.chooser)

        if branch is None:
            if len(candidates) > 1:
                display.print_message(f"No branch chosen for phrase '{name}'")
                return Outcome.AMBIGUOUS
            display.print_message(f"No branch found for phrase '{name}'")
            return Outcome.NOT_FOUND

        self.git.checkout(branch)
        display.print_switched(branch)
        return Outcome.OK

    def checkout_new(self, title: str, base: str | None = None) -> Outcome:
        """Create and checkout a new branch, optionally from another base."""
        current = self.git.current_branch

        if base and base != current:
            outcome = self.checkout(base)
            if outcome != Outcome.OK:
                return outcome
            try:
                self.git.pull()
            except GitError as e:
                display.print_warning(f"Could not pull '{base}', branching from the local copy: {e}")
            current = self.git.current_branch

        branch = sanitize_branch_name(title)
        self.git.create_branch(branch)
        display.print_created(branch, current)
        return Outcome.OK

    def new_sprint_branch(self, scope: BranchScope, sprint: str, title: str) -> Outcome:
        """Create a bug, instant or story branch for a sprint."""
        if scope == BranchScope.STORY:
            base = self.settings.release_branch(sprint)
        else:
            base = self.settings.main_branch

        return self.checkout_new(sprint_branch_name(sprint, scope, title), base)

    def new_bug(self, sprint: str, title: str) -> Outcome:
        return self.new_sprint_branch(BranchScope.BUG, sprint, title)

    def new_instant(self, sprint: str, title: str) -> Outcome:
        return self.new_sprint_branch(BranchScope.INSTANT, sprint, title)

    def new_story(self, sprint: str, title: str) -> Outcome:
        return self.new_sprint_branch(BranchScope.STORY, sprint, title)

    def delete_branch(self, name: str, remote: bool = False) -> Outcome:
        """Delete a branch locally, and on the remote as well if asked."""
        if name == self.git.current_branch:
            display.print_message("You can't delete the currently active branch!")
            return Outcome.REJECTED

        self.git.delete_branch(name)
        display.print_success(f"Deleted branch '{name}'")

        if remote:
            self.git.delete_remote_branch(name)
            display.print_success(f"Deleted branch '{name}' from {self.git.remote}")

        return Outcome.OK

    def rename_branch(
        self,
        new_name: str,
        old_name: str | None = None,
        remote: bool = False,
    ) -> Outcome:
        """Rename the current (or a given) branch, and on the remote as well if asked."""
        new_name = sanitize_branch_name(new_name)
        if old_name:
            old_name = sanitize_branch_name(old_name)
            self.git.rename_branch(new_name, old_name)
        else:
            old_name = self.git.current_branch
            self.git.rename_branch(new_name)

        display.print_success(f"Renamed branch '{old_name}' to '{new_name}'")

        if remote:
            self.git.push_rename(old_name, new_name)
            display.print_success(f"Renamed branch on {self.git.remote}")

        return Outcome.OK

    def master(self) -> Outcome:
        """Checkout the main branch and pull it."""
        outcome = self.checkout(self.settings.main_branch)
        if outcome == Outcome.OK:
            self.git.pull()
        return outcome

    def sprint(self, sprint: str) -> Outcome:
        """Checkout the release branch of a sprint."""
        return self.checkout(self.settings.release_branch(sprint))

    # Merging

    def merge(self, source: str, target: str | None = None, push: bool = False) -> Outcome:
        """
        Merge source into target.

        Without a target this is a plain `git merge` into the current branch.
        With a target, local changes are stashed, both branches are pulled and
        source is merged into target. Whatever happens along the way the user
        ends up on the branch they started on with their changes restored.
        """
        if target is None:
            self.git.merge(source)
            display.print_merged(source, self.git.current_branch)
            return Outcome.OK

        if source == target:
            display.print_message("The 'from' and 'to' branch may not be equal!")
            return Outcome.REJECTED

        if not self.git.branch_exists(source):
            display.print_message(f"Branch '{source}' doesn't exist")
            return Outcome.REJECTED

        if not self.git.branch_exists(target):
            display.print_message(f"Branch '{target}' doesn't exist")
            return Outcome.REJECTED

        start = self.git.current_branch
        stashed = self.git.stash(include_untracked=True)
        outcome = Outcome.OK

        try:
            self.git.checkout(source)
            self.git.pull()
            self.git.checkout(target)
            self.git.pull()
            self.git.merge(source)
            display.print_merged(source, target)

            # Make sure we are about to push the right branch
            if push and self.git.current_branch == target:
                self.git.push_branch(target)
                display.print_success(f"Pushed '{target}'")

        except GitError as e:
            display.print_error(str(e))
            outcome = Outcome.BACKEND_ERROR

        finally:
            self._restore(start, target, stashed)

        return outcome

    def _restore(self, start: str, target: str, stashed: bool) -> None:
        """Go back to the starting branch and pop stashed changes."""
        if start != target:
            try:
                self.git.checkout(start)
            except GitError as e:
                display.print_error(str(e))
                display.print_warning(f"Could not switch back to '{start}'")

        if stashed:
            try:
                self.git.stash_pop()
            except GitError as e:
                display.print_error(str(e))
                display.print_warning("Your changes are still stashed, see `git stash list`")

    def update_base(self) -> str:
        """Get the branch the current branch should be updated with."""
        parsed = parse_branch_name(self.git.current_branch, self.settings.ticket_prefix)
        if parsed is not None and parsed.is_ticket_story:
            return self.settings.release_branch(parsed.sprint)
        return self.settings.main_branch

    def update(self) -> Outcome:
        """Merge the relevant base branch into the current branch."""
        return self.merge(self.update_base(), self.git.current_branch)

    def update_sprint(self, sprint: str) -> Outcome:
        """Merge the main branch into a sprint release branch and push it."""
        return self.merge(
            self.settings.main_branch,
            self.settings.release_branch(sprint),
            push=True,
        )

    # Commits

    def push(self) -> Outcome:
        """Push the current branch and set its upstream."""
        branch = self.git.current_branch
        self.git.push_branch(branch)
        display.print_success(f"Pushed '{branch}' to {self.git.remote}")
        return Outcome.OK

    def commit_all(self, message: str) -> Outcome:
        """Stage and commit everything."""
        self.git.stage_all()
        sha = self.git.commit(message)
        display.print_success(f"Committed {sha[:8]}: {message}")
        return Outcome.OK

    def commit_all_push(self, message: str) -> Outcome:
        self.commit_all(message)
        return self.push()

    def commit_all_pull_request(self, message: str) -> Outcome:
        self.commit_all(message)
        return self.pull_request()

    def commit_history(self, max_count: int = 5) -> Outcome:
        display.print_lines(self.git.log(max_count).splitlines())
        return Outcome.OK

    def discard(self) -> Outcome:
        """Discard all (un)staged changes to tracked files."""
        self.git.discard()
        display.print_success("Discarded all local changes")
        return Outcome.OK

    # Pull requests

    def pull_request_url(self, push_url: str) -> str | None:
        """Build the pull request URL for the current branch, None for unknown hosts."""
        branch = self.git.current_branch
        parsed = parse_branch_name(branch, self.settings.ticket_prefix)

        base = self.settings.main_branch
        if parsed is not None and parsed.is_ticket_story:
            base = self.settings.release_branch(parsed.sprint)

        endpoint = build_endpoint(push_url, base, branch)
        if endpoint is None:
            return None

        ticket = parsed.ticket if parsed is not None else None
        body = build_body(ticket, self.settings.ticket_prefix, self.settings.ticket_url)
        return f"{endpoint}&{body}"

    def pull_request(self) -> Outcome:
        """Push the current branch and open a pull request for it in the browser."""
        # The branch has to exist remotely before a pull request can be made
        self.push()

        push_url = self.git.get_remote_url(push=True)
        url = self.pull_request_url(push_url)
        if url is None:
            display.print_message(
                f"Couldn't determine the repository host for push url '{push_url}'"
            )
            return Outcome.UNKNOWN_HOST

        display.print_pull_request_url(url)
        if not self.opener(url):
            display.print_warning("Could not open a browser, open the URL above manually")
        return Outcome.OK


def create_engine(
    repo_path: str | None = None,
    settings: Settings | None = None,
    chooser: Chooser | None = None,
) -> WorkflowEngine:
    """Create a configured workflow engine."""
    settings = settings or load_settings()
    git = GitOperations(repo_path, remote=settings.remote, verbose=settings.verbose)
    return WorkflowEngine(git, settings, chooser=chooser or display.prompt_branch_choice)
