"""Container tooling: docker and kubectl inspection subcommands."""

from .base import Classifier, first_subcommand

_DOCKER_READ_ONLY = frozenset(
    {
        "ps",
        "images",
        "logs",
        "inspect",
        "version",
        "info",
        "top",
        "stats",
        "history",
        "port",
        "diff",
        "events",
        "search",
    }
)
# docker <object> <action> management commands
_DOCKER_OBJECTS = frozenset(
    {"container", "image", "network", "volume", "compose", "context", "system", "buildx", "node", "service"}
)
_DOCKER_OBJECT_ACTIONS = frozenset({"ls", "list", "ps", "logs", "inspect", "top", "images", "port", "history", "df", "config"})
_DOCKER_VALUE_FLAGS = ("-H", "--host", "--context", "-c", "--config", "--log-level", "-l", "-f", "--file", "-p", "--project-name")

_KUBECTL_READ_ONLY = frozenset(
    {
        "get",
        "describe",
        "logs",
        "explain",
        "version",
        "top",
        "api-resources",
        "api-versions",
        "cluster-info",
        "diff",
        "events",
    }
)
_KUBECTL_SUBGROUPS = {
    "config": frozenset({"view", "get-contexts", "current-context", "get-clusters", "get-users"}),
    "auth": frozenset({"can-i", "whoami"}),
    "rollout": frozenset({"status", "history"}),
}
_KUBECTL_VALUE_FLAGS = (
    "-n",
    "--namespace",
    "--context",
    "--kubeconfig",
    "--cluster",
    "--user",
    "-s",
    "--server",
    "--token",
    "-l",
    "--selector",
    "-o",
    "--output",
)


class ContainersClassifier(Classifier):
    priority = 30
    tools = ("docker", "kubectl")

    @property
    def name(self) -> str:
        return "containers"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        if tool == "docker":
            return self._docker(args)
        return self._kubectl(args)

    @staticmethod
    def _docker(args: list[str]) -> bool:
        subcmd, rest = first_subcommand(args, _DOCKER_VALUE_FLAGS)
        if subcmd in _DOCKER_READ_ONLY:
            return True
        if subcmd in _DOCKER_OBJECTS:
            action, _ = first_subcommand(rest, _DOCKER_VALUE_FLAGS)
            return action in _DOCKER_OBJECT_ACTIONS
        return False

    @staticmethod
    def _kubectl(args: list[str]) -> bool:
        subcmd, rest = first_subcommand(args, _KUBECTL_VALUE_FLAGS)
        if subcmd in _KUBECTL_READ_ONLY:
            return True
        if subcmd in _KUBECTL_SUBGROUPS:
            action, _ = first_subcommand(rest, _KUBECTL_VALUE_FLAGS)
            return action in _KUBECTL_SUBGROUPS[subcmd]
        return False
