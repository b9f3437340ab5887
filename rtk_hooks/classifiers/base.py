"""Base class for read-only classifiers."""

# Flags that only ask a tool to describe itself.
INFO_FLAGS = ("--version", "-V", "--help", "-h")


class Classifier:
    """Decides whether an invocation of one of its tools performs no mutation.

    Subclasses set ``tools`` and implement ``is_read_only``. Anything a
    classifier is unsure about must return False so the command falls back
    to the user's permission rules.
    """

    priority = 100
    tools: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        raise NotImplementedError

    def can_handle(self, tool: str) -> bool:
        return tool in self.tools

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        raise NotImplementedError


def is_info_query(args: list[str]) -> bool:
    """True for `<tool> --version` style invocations."""
    return len(args) == 1 and args[0] in INFO_FLAGS


def positionals(args: list[str]) -> list[str]:
    """Arguments that are not flags."""
    return [a for a in args if not a.startswith("-")]


def has_flag(args: list[str], *flags: str) -> bool:
    """True if any argument is one of ``flags``.

    Also matches ``--flag=value`` and a short flag with its value attached,
    so ``-o/tmp/out`` counts as ``-o``.
    """
    for arg in args:
        if arg in flags:
            return True
        if arg.startswith("-") and "=" in arg and arg.split("=", 1)[0] in flags:
            return True
        if len(arg) > 2 and arg[0] == "-" and arg[1] != "-" and arg[:2] in flags:
            return True
    return False


def has_short_option(args: list[str], *flags: str) -> bool:
    """Like ``has_flag``, but also looks inside bundled short options.

    For getopt-style tools ``-sSo out`` sets ``-o``. Any letter of a bundle
    counts, including letters of an attached value.
    """
    letters = {f[1] for f in flags if len(f) == 2 and f[0] == "-" and f[1] != "-"}
    for arg in args:
        if len(arg) > 1 and arg[0] == "-" and arg[1] != "-" and letters.intersection(arg[1:]):
            return True
    return has_flag(args, *flags)


def first_subcommand(args: list[str], value_flags: tuple[str, ...] = ()) -> tuple[str | None, list[str]]:
    """Return the first positional argument and everything after it.

    Options listed in ``value_flags`` consume the following argument, so
    ``kubectl -n prod get pods`` yields ``("get", ["pods"])``.
    """
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            i += 1
            break
        if not arg.startswith("-"):
            return arg, args[i + 1 :]
        if arg in value_flags:
            i += 2
            continue
        i += 1
    if i < len(args):
        return args[i], args[i + 1 :]
    return None, []
