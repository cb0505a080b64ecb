"""Shell command abstractions for CI deployment operations.

This package provides a clean, well-documented interface for shell commands used
during deployment. It is organized into specialized modules for each tool:

- helm: Helm client setup, linting and release management
- kubectl: Kubeconfig management and rollout inspection
- tiller: Local Tiller server lifecycle

Usage:
    from src.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands(project_root=Path("."))
    if commands.helm.lint(chart_path).success:
        print("Chart is valid")
"""

from collections.abc import Mapping
from pathlib import Path

from .helm import HelmCommands
from .kubectl import KubectlCommands
from .runner import CommandRunner
from .tiller import TillerCommands, TillerProcess
from .types import CommandResult, SetOverride


class ShellCommands:
    """Unified interface for all shell command operations.

    This class provides a facade over the specialized command modules,
    offering a single point of access for deployment operations while
    maintaining separation of concerns internally.

    Attributes:
        helm: Helm-related commands
        kubectl: Kubernetes kubectl commands
        tiller: Local Tiller server commands

    Example:
        >>> commands = ShellCommands(Path("."), env={"HELM_HOST": "localhost:44134"})
        >>> commands.helm.upgrade_install("my-release", chart_path)
    """

    def __init__(
        self, project_root: Path, env: Mapping[str, str] | None = None
    ) -> None:
        """Initialize the shell commands executor.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
            env: Extra environment variables for every command
        """
        self._project_root = Path(project_root)
        self._runner = CommandRunner(self._project_root, env=env)

        self.helm = HelmCommands(self._runner)
        self.kubectl = KubectlCommands(self._runner)
        self.tiller = TillerCommands(self._runner)

    @property
    def project_root(self) -> Path:
        """Get the project root path."""
        return self._project_root

    @property
    def runner(self) -> CommandRunner:
        """Get the underlying command runner."""
        return self._runner


__all__ = [
    "ShellCommands",
    "CommandResult",
    "SetOverride",
    "TillerProcess",
    "HelmCommands",
    "KubectlCommands",
    "TillerCommands",
    "CommandRunner",
]
