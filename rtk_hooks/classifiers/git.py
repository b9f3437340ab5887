"""Git: inspection subcommands and the listing forms of branch, tag, stash, remote."""

from .base import Classifier, has_flag, has_short_option, positionals

# Global options that consume the next argument
_GIT_VALUE_OPTS = ("-C", "--git-dir", "--work-tree", "--namespace")

# Global options that can point git at arbitrary programs (core.fsmonitor,
# diff.external, core.pager, alternate exec path)
_GIT_UNSAFE_GLOBALS = ("-c", "--config-env", "--exec-path")

# Options of the inspection subcommands that write files or run programs
_INSPECT_UNSAFE_LONG = ("--output", "--open-files-in-pager", "--ext-diff")
_INSPECT_UNSAFE_SHORT = ("-O",)

_ALWAYS_READ_ONLY = frozenset(
    {
        "status",
        "log",
        "diff",
        "show",
        "blame",
        "annotate",
        "shortlog",
        "describe",
        "grep",
        "ls-files",
        "ls-tree",
        "ls-remote",
        "rev-parse",
        "rev-list",
        "cat-file",
        "show-ref",
        "show-branch",
        "merge-base",
        "name-rev",
        "count-objects",
        "check-ignore",
        "check-attr",
        "whatchanged",
        "cherry",
        "range-diff",
        "version",
        "help",
    }
)

_BRANCH_MUTATING = (
    "-d",
    "-D",
    "--delete",
    "-m",
    "-M",
    "--move",
    "-c",
    "-C",
    "--copy",
    "-f",
    "--force",
    "-u",
    "--set-upstream-to",
    "--unset-upstream",
    "--edit-description",
    "-t",
    "--track",
    "--no-track",
)
_BRANCH_FILTERS = ("-l", "--list", "--contains", "--no-contains", "--merged", "--no-merged", "--points-at")

_TAG_MUTATING = ("-d", "--delete", "-a", "--annotate", "-s", "--sign", "-u", "-f", "--force", "-m", "-F")

_CONFIG_QUERIES = ("--get", "--get-all", "--get-regexp", "--get-urlmatch", "-l", "--list")


def split_global_options(args: list[str]) -> tuple[str | None, list[str]]:
    """Skip git's global options; return (subcommand, subcommand args).

    Returns ``(None, [])`` when a global option overrides configuration or
    the exec path, since the subcommand alone no longer says what runs.
    """
    i = 0
    while i < len(args):
        arg = args[i]
        if not arg.startswith("-"):
            return arg, args[i + 1 :]
        if arg.split("=", 1)[0] in _GIT_UNSAFE_GLOBALS or (arg.startswith("-c") and not arg.startswith("--")):
            return None, []
        if arg in _GIT_VALUE_OPTS:
            i += 2
            continue
        i += 1
    return None, []


def has_long_option(args: list[str], *flags: str) -> bool:
    """True if an argument is one of ``flags`` or an abbreviation of one.

    git accepts any unambiguous prefix of a long option (``--out=x``).
    """
    for arg in args:
        if not arg.startswith("--") or len(arg) <= 2:
            continue
        name = arg.split("=", 1)[0]
        if any(flag.startswith(name) for flag in flags):
            return True
    return False


class GitClassifier(Classifier):
    priority = 20
    tools = ("git",)

    @property
    def name(self) -> str:
        return "git"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        subcmd, rest = split_global_options(args)
        if subcmd is None:
            return False
        if subcmd in _ALWAYS_READ_ONLY:
            if has_long_option(rest, *_INSPECT_UNSAFE_LONG) or has_short_option(rest, *_INSPECT_UNSAFE_SHORT):
                return False
            if subcmd == "ls-remote":
                return not (has_long_option(rest, "--upload-pack") or has_short_option(rest, "-u"))
            return True
        if subcmd == "branch":
            return self._branch_is_listing(rest)
        if subcmd == "tag":
            if not rest:
                return True
            return has_flag(rest, "-l", "--list") and not has_flag(rest, *_TAG_MUTATING)
        if subcmd == "stash":
            return bool(rest) and rest[0] in ("list", "show")
        if subcmd == "remote":
            if not rest or rest in (["-v"], ["--verbose"]):
                return True
            return rest[0] in ("show", "get-url")
        if subcmd == "config":
            return has_flag(rest, *_CONFIG_QUERIES)
        if subcmd == "reflog":
            return not rest or rest[0] == "show" or rest[0].startswith("-")
        return False

    @staticmethod
    def _branch_is_listing(rest: list[str]) -> bool:
        if has_flag(rest, *_BRANCH_MUTATING):
            return False
        # A bare positional creates a branch unless a listing filter is given
        if positionals(rest):
            return has_flag(rest, *_BRANCH_FILTERS)
        return True
