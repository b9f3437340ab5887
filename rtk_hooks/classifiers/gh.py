"""GitHub CLI: list/view/status style subcommands and GET-only `gh api` calls."""

from .base import Classifier, first_subcommand, has_flag

_GROUPS = frozenset(
    {
        "pr",
        "issue",
        "run",
        "repo",
        "release",
        "workflow",
        "gist",
        "label",
        "cache",
        "codespace",
        "project",
        "ruleset",
        "secret",
        "variable",
    }
)
_READ_ACTIONS = frozenset({"list", "ls", "view", "status", "diff", "checks", "watch"})

# gh api switches to POST as soon as any of these is given
_API_BODY_FLAGS = ("-f", "--raw-field", "-F", "--field", "--input")
_GLOBAL_VALUE_FLAGS = ("-R", "--repo")


class GhClassifier(Classifier):
    priority = 25
    tools = ("gh",)

    @property
    def name(self) -> str:
        return "gh"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        group, rest = first_subcommand(args, _GLOBAL_VALUE_FLAGS)
        if group in ("status", "search"):
            return True
        if group == "auth":
            return bool(rest) and rest[0] == "status"
        if group == "api":
            return self._api_is_get(rest)
        if group in _GROUPS:
            action, _ = first_subcommand(rest, _GLOBAL_VALUE_FLAGS)
            return action in _READ_ACTIONS
        return False

    @staticmethod
    def _api_is_get(rest: list[str]) -> bool:
        if has_flag(rest, *_API_BODY_FLAGS):
            return False
        for i, arg in enumerate(rest):
            method = None
            if arg in ("-X", "--method") and i + 1 < len(rest):
                method = rest[i + 1]
            elif arg.startswith("--method="):
                method = arg.split("=", 1)[1]
            elif arg.startswith("-X") and len(arg) > 2:
                method = arg[2:]
            if method is not None and method.upper() != "GET":
                return False
        return True
