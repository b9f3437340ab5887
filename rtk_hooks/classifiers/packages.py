"""Package managers and toolchains: npm, pnpm, pip, cargo, go, prisma."""

from .base import Classifier, first_subcommand, has_flag

_NPM_READ_ONLY = frozenset(
    {"ls", "list", "ll", "la", "outdated", "view", "v", "info", "show", "why", "explain", "search", "help", "doctor", "fund", "root", "prefix", "bin"}
)
_PNPM_READ_ONLY = frozenset({"ls", "list", "ll", "outdated", "why", "view", "info", "licenses", "root", "bin", "help"})
_PIP_READ_ONLY = frozenset({"list", "show", "freeze", "check", "inspect", "index", "debug", "help"})
_CARGO_READ_ONLY = frozenset(
    {"tree", "metadata", "search", "version", "pkgid", "locate-project", "read-manifest", "verify-project", "help"}
)
_GO_READ_ONLY = frozenset({"version", "list", "doc", "vet", "help"})
_PRISMA_READ_ONLY = frozenset({"validate", "version", "help"})

# go build flags that run another program
_GO_UNSAFE_FLAGS = ("-vettool", "--vettool", "-toolexec", "--toolexec", "-exec", "--exec")


class PackagesClassifier(Classifier):
    priority = 40
    tools = ("npm", "pnpm", "pip", "cargo", "go", "prisma")

    @property
    def name(self) -> str:
        return "packages"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        subcmd, rest = first_subcommand(args)
        if subcmd is None:
            return False
        if tool == "npm":
            return self._npm(subcmd, rest)
        if tool == "pnpm":
            return self._pnpm(subcmd, rest)
        if tool == "pip":
            return subcmd in _PIP_READ_ONLY or (subcmd == "config" and bool(rest) and rest[0] in ("list", "get"))
        if tool == "cargo":
            return subcmd in _CARGO_READ_ONLY
        if tool == "go":
            if subcmd == "env":
                return not has_flag(rest, "-w", "-u")
            if subcmd == "mod":
                return bool(rest) and rest[0] in ("graph", "why", "verify")
            if has_flag(rest, *_GO_UNSAFE_FLAGS) or self._go_updates_mod(rest):
                return False
            return subcmd in _GO_READ_ONLY
        if tool == "prisma":
            if subcmd == "migrate":
                return bool(rest) and rest[0] == "status"
            return subcmd in _PRISMA_READ_ONLY
        return False

    @staticmethod
    def _npm(subcmd: str, rest: list[str]) -> bool:
        if subcmd == "audit":
            return not rest or rest[0] != "fix"
        if subcmd == "config":
            return bool(rest) and rest[0] in ("get", "list", "ls")
        return subcmd in _NPM_READ_ONLY

    @staticmethod
    def _pnpm(subcmd: str, rest: list[str]) -> bool:
        if subcmd == "audit":
            return not has_flag(rest, "--fix")
        return subcmd in _PNPM_READ_ONLY

    @staticmethod
    def _go_updates_mod(rest: list[str]) -> bool:
        """True for `-mod=mod`, which lets go list and go vet rewrite go.mod."""
        for i, arg in enumerate(rest):
            if not arg.startswith("-"):
                continue
            name, _, value = arg.lstrip("-").partition("=")
            if name != "mod":
                continue
            if not value and i + 1 < len(rest):
                value = rest[i + 1]
            if value == "mod":
                return True
        return False
