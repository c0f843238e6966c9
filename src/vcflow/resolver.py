"""Command name resolution for vcflow."""

from collections.abc import Collection, Mapping

from vcflow.config import ALIASES


def resolve_command(
    name: str,
    commands: Collection[str],
    aliases: Mapping[str, str] = ALIASES,
) -> str | None:
    """
    Resolve a typed command word to a known command name.

    Known command names win over aliases. Returns None when the word is
    neither, in which case the caller hands it to git instead.
    """
    if name in commands:
        return name

    canonical = aliases.get(name)
    if canonical is not None and canonical in commands:
        return canonical

    return None
