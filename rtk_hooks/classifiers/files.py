"""File reading and listing: cat, grep, rg, ls, tree, find, diff."""

from .base import Classifier, has_flag, has_short_option

# find actions that run programs or write files
_FIND_ACTIONS = (
    "-exec",
    "-execdir",
    "-ok",
    "-okdir",
    "-delete",
    "-fprint",
    "-fprint0",
    "-fprintf",
    "-fls",
)


class FilesClassifier(Classifier):
    priority = 10
    tools = ("cat", "grep", "rg", "ls", "tree", "find", "diff")

    @property
    def name(self) -> str:
        return "files"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        if tool == "find":
            return not any(a in _FIND_ACTIONS for a in args)
        if tool == "tree":
            # tree -o writes its listing to a file
            return not has_short_option(args, "-o")
        if tool == "rg":
            # --pre runs an arbitrary preprocessor on every file
            return not has_flag(args, "--pre")
        return True
