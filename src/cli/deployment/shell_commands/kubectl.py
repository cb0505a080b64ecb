"""Kubectl command abstractions.

This module provides the kubectl operations used during a CI deployment:
kubeconfig management for the deploy context, rollout status, and
read-only inspection of what has been deployed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class KubectlCommands:
    """Kubectl-related shell commands.

    Provides operations for:
    - Kubeconfig management (cluster, credentials, context)
    - Rollout status
    - Resource inspection (get, describe by label)
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize kubectl commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Kubeconfig
    # =========================================================================

    def set_cluster(self, name: str, server: str) -> CommandResult:
        """Create or update a cluster entry in kubeconfig."""
        return self._runner.run(
            ["kubectl", "config", "set-cluster", name, f"--server={server}"],
            capture_output=False,
        )

    def set_credentials(self, user: str, token: str) -> CommandResult:
        """Create or update a bearer-token user entry in kubeconfig."""
        return self._runner.run(
            ["kubectl", "config", "set-credentials", user, f"--token={token}"],
            capture_output=False,
        )

    def set_context(
        self,
        name: str,
        *,
        cluster: str,
        namespace: str,
        user: str,
    ) -> CommandResult:
        """Create or update a context binding cluster, namespace and user."""
        return self._runner.run(
            [
                "kubectl",
                "config",
                "set-context",
                name,
                f"--cluster={cluster}",
                f"--namespace={namespace}",
                f"--user={user}",
            ],
            capture_output=False,
        )

    def use_context(self, name: str) -> CommandResult:
        """Switch the current kubeconfig context."""
        return self._runner.run(
            ["kubectl", "config", "use-context", name], capture_output=False
        )

    # =========================================================================
    # Deployment Operations
    # =========================================================================

    def rollout_status(self, resource_type: str, name: str) -> CommandResult:
        """Block until a rollout completes or fails.

        Args:
            resource_type: Resource kind (e.g., "deployment")
            name: Resource name

        Returns:
            CommandResult; unsuccessful if the rollout failed
        """
        return self._runner.run(
            ["kubectl", "rollout", "status", f"{resource_type}/{name}", "-w"],
            capture_output=False,
        )

    # =========================================================================
    # Inspection
    # =========================================================================

    def get_pods(self, label_selector: str) -> CommandResult:
        """List pods matching a label selector."""
        return self._runner.run(
            ["kubectl", "get", "pods", "-l", label_selector], capture_output=False
        )

    def describe(self, resource_type: str, label_selector: str) -> CommandResult:
        """Describe all resources of a kind matching a label selector."""
        return self._runner.run(
            ["kubectl", "describe", resource_type, "-l", label_selector],
            capture_output=False,
        )
