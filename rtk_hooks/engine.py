"""Rewrite engine: launcher stripping, tool matching, argument transforms, classification."""

import re
import shlex

from . import config
from .classifiers import classifier_for
from .classifiers.base import is_info_query
from .rules import HEAD_TRANSFORMS, build_direct_re, build_launchers

# Shell syntax that can chain, redirect or substitute: never auto-approved.
_SHELL_OPERATORS_RE = re.compile(r"[;&|<>`\n]|\$\(")


class Rewrite:
    """Result of rewriting one command."""

    __slots__ = ("command", "original", "prefix", "read_only", "tool")

    def __init__(self, original: str, command: str, tool: str, prefix: str = "", read_only: bool = False):
        self.original = original
        self.command = command
        self.tool = tool
        self.prefix = prefix
        self.read_only = read_only

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "command": self.command,
            "tool": self.tool,
            "prefix": self.prefix,
            "read_only": self.read_only,
        }

    def __repr__(self):
        return f"Rewrite({self.original!r} -> {self.command!r}, read_only={self.read_only})"


class RewriteEngine:
    """Matches a command against the rewrite tables; first match wins.

    Order: already-rewritten and heredoc guards, launcher prefixes, direct
    tools, then argument transforms.
    """

    def __init__(self, binary: str | None = None):
        self.binary = binary or config.get("binary")
        self._launchers = build_launchers()
        self._direct_re = build_direct_re()
        b = re.escape(self.binary)
        self._rewritten_re = re.compile(rf"^{b}(?:\s|$)|/{b}\s")

    def is_rewritten(self, command: str) -> bool:
        """True if the command already goes through the replacement binary."""
        return bool(self._rewritten_re.search(command.strip()))

    def rewrite(self, command: str) -> Rewrite | None:
        """Rewrite a shell command, or return None to let it run unmodified."""
        cmd = command.strip()
        if not cmd or self.is_rewritten(cmd):
            return None
        if "<<" in cmd:
            return None

        matched = self._match_prefix(cmd)
        if matched is not None:
            tool, prefix, rest = matched
            return Rewrite(
                original=command,
                command=f"{self.binary} {rest}",
                tool=tool,
                prefix=prefix,
                read_only=self.classify(rest, cmd),
            )

        # The line limit goes at the end, so only a lone head can be transformed
        if _SHELL_OPERATORS_RE.search(cmd):
            return None
        for pattern in HEAD_TRANSFORMS:
            m = pattern.match(cmd)
            if m:
                files = m.group("files")
                return Rewrite(
                    original=command,
                    command=f"{self.binary} cat {files} --max-lines {m.group('lines')}",
                    tool="head",
                    read_only=True,
                )
        return None

    def rewrite_rule_command(self, command: str) -> str | None:
        """Rewrite the command part of a permission rule.

        Launchers and direct tools only: rule patterns have no file
        arguments for the head transform to work with.
        """
        cmd = command.strip()
        if not cmd or self.is_rewritten(cmd):
            return None
        matched = self._match_prefix(cmd)
        if matched is None:
            return None
        return f"{self.binary} {matched[2]}"

    def _match_prefix(self, cmd: str) -> tuple[str, str, str] | None:
        """Return (tool, launcher prefix, command without launcher) or None."""
        for prefix, pattern in self._launchers:
            m = pattern.match(cmd)
            if m:
                return m.group("tool"), prefix, m.group("rest")
        m = self._direct_re.match(cmd)
        if m:
            return m.group("tool"), "", m.group("rest")
        return None

    def classify(self, command: str, raw: str | None = None) -> bool:
        """Decide whether ``command`` (launcher already stripped) is read-only.

        ``raw`` is the full original command, checked for shell operators.
        """
        if _SHELL_OPERATORS_RE.search(raw if raw is not None else command):
            return False
        try:
            tokens = shlex.split(command)
        except ValueError:
            return False
        if not tokens:
            return False
        tool, args = tokens[0], tokens[1:]
        classifier = classifier_for(tool)
        if classifier is None:
            return False
        if is_info_query(args):
            return True
        return classifier.is_read_only(tool, args)


_engine: RewriteEngine | None = None


def rewrite(command: str) -> Rewrite | None:
    """Rewrite with a shared engine built from the current config."""
    global _engine  # noqa: PLW0603
    if _engine is None or _engine.binary != config.get("binary"):
        _engine = RewriteEngine()
    return _engine.rewrite(command)
