"""Type checkers, linters and formatters."""

from .base import Classifier, first_subcommand, has_flag

_RUFF_SUBCOMMANDS = ("check", "format", "rule", "linter", "config", "version", "clean", "server", "analyze")
_RUFF_WRITE_FLAGS = ("--fix", "--unsafe-fixes", "--add-noqa", "--fix-only", "--watch", "-o", "--output-file")
_ESLINT_WRITE_FLAGS = ("--fix", "-o", "--output-file", "--init")
_PRETTIER_CHECK_FLAGS = ("--check", "-c", "--list-different", "-l")
_PRETTIER_WRITE_FLAGS = ("--write", "-w")


class LintClassifier(Classifier):
    priority = 50
    tools = ("tsc", "eslint", "prettier", "ruff", "golangci-lint")

    @property
    def name(self) -> str:
        return "lint"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        if tool == "tsc":
            return has_flag(args, "--noEmit")
        if tool == "eslint":
            return not has_flag(args, *_ESLINT_WRITE_FLAGS)
        if tool == "prettier":
            return has_flag(args, *_PRETTIER_CHECK_FLAGS) and not has_flag(args, *_PRETTIER_WRITE_FLAGS)
        if tool == "ruff":
            return self._ruff(args)
        if tool == "golangci-lint":
            subcmd, rest = first_subcommand(args)
            if subcmd == "run":
                return not has_flag(rest, "--fix")
            return subcmd in ("linters", "version", "help")
        return False

    @staticmethod
    def _ruff(args: list[str]) -> bool:
        subcmd, rest = first_subcommand(args)
        if subcmd not in _RUFF_SUBCOMMANDS:
            # Legacy `ruff <path>` form is an implicit check
            subcmd, rest = "check", args
        if subcmd == "check":
            return not has_flag(rest, *_RUFF_WRITE_FLAGS)
        if subcmd == "format":
            return has_flag(rest, "--check", "--diff")
        return subcmd in ("rule", "linter", "config", "version")
