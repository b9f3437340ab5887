"""Rewrite tables: launcher prefixes, direct tools and argument transforms."""

import re

from .classifiers import collect_tool_names

# Tools pnpm launches for the user rather than pnpm subcommands of its own.
PNPM_LAUNCHED = ("tsc", "lint", "test", "vitest", "playwright")


def direct_tools() -> list[str]:
    """Tools rewritten by simply prefixing the replacement binary."""
    return collect_tool_names()


def _tool_alternation(tools) -> str:
    return "|".join(re.escape(t) for t in tools)


def build_direct_re() -> re.Pattern:
    """``^(git|gh|...)(\\s|$)`` with the rest of the command captured."""
    return re.compile(rf"^(?P<rest>(?P<tool>{_tool_alternation(direct_tools())})(?:\s.*)?)$", re.S)


def build_launchers() -> list[tuple[str, re.Pattern]]:
    """Launcher prefixes in match order, as (prefix name, pattern) pairs.

    Each pattern captures ``rest``: the command with the launcher stripped,
    and ``tool``: the tool the launcher runs.
    """
    direct = _tool_alternation(direct_tools())
    return [
        # npx is just a launcher; npx flags (npx -y ...) are left alone
        ("npx", re.compile(rf"^npx\s+(?P<rest>(?P<tool>{direct})(?:\s.*)?)$", re.S)),
        (
            "pnpm",
            re.compile(rf"^pnpm\s+(?P<rest>(?P<tool>{_tool_alternation(PNPM_LAUNCHED)})(?:\s.*)?)$", re.S),
        ),
        ("python -m", re.compile(r"^python3?\s+-m\s+(?P<rest>(?P<tool>pytest)(?:\s.*)?)$", re.S)),
        ("uv", re.compile(r"^uv\s+(?P<rest>(?P<tool>pip)\s+\S.*)$", re.S)),
    ]


# head -N FILE / head --lines=N FILE / head -n N FILE -> cat FILE --max-lines N
HEAD_TRANSFORMS = [
    re.compile(r"^head\s+-(?P<lines>\d+)\s+(?P<files>\S.*)$", re.S),
    re.compile(r"^head\s+--lines=(?P<lines>\d+)\s+(?P<files>\S.*)$", re.S),
    re.compile(r"^head\s+-n\s*(?P<lines>\d+)\s+(?P<files>\S.*)$", re.S),
]
