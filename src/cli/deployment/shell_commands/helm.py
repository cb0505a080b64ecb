"""Helm command abstractions.

This module provides commands for the Helm 2 client: client-only
initialization, repository index updates, chart linting, and
release upgrade/install.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult, SetOverride

if TYPE_CHECKING:
    from .runner import CommandRunner


class HelmCommands:
    """Helm-related shell commands.

    Provides operations for:
    - Client setup (init, repo update)
    - Chart validation (lint)
    - Release management (upgrade --install)
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Helm commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Client Setup
    # =========================================================================

    def init_client_only(self) -> CommandResult:
        """Initialize the local Helm home without installing Tiller."""
        return self._runner.run(["helm", "init", "--client-only"], capture_output=False)

    def repo_update(self) -> CommandResult:
        """Refresh the chart repository index."""
        return self._runner.run(["helm", "repo", "update"], capture_output=False)

    # =========================================================================
    # Chart Validation
    # =========================================================================

    def lint(self, chart_path: Path) -> CommandResult:
        """Run static analysis on a chart.

        Args:
            chart_path: Path to the Helm chart directory

        Returns:
            CommandResult; unsuccessful when lint reports errors
        """
        return self._runner.run(["helm", "lint", str(chart_path)], capture_output=False)

    # =========================================================================
    # Release Management
    # =========================================================================

    @staticmethod
    def build_upgrade_install(
        release_name: str,
        chart_path: Path,
        *,
        overrides: Sequence[SetOverride] = (),
        force: bool = True,
        recreate_pods: bool = True,
        debug: bool = True,
        wait: bool = True,
    ) -> list[str]:
        """Compose the argv for `helm upgrade --install`.

        Args:
            release_name: Name for the Helm release
            chart_path: Path to the Helm chart directory
            overrides: Value overrides, rendered in order
            force: Force resource updates through replacement
            recreate_pods: Restart pods for the resource if applicable
            debug: Enable verbose helm output
            wait: Wait until all resources are in a ready state

        Returns:
            Command and arguments as a list
        """
        cmd = ["helm", "upgrade"]
        if force:
            cmd.append("--force")
        if recreate_pods:
            cmd.append("--recreate-pods")
        if debug:
            cmd.append("--debug")
        for override in overrides:
            cmd.extend(override.to_args())
        if wait:
            cmd.append("--wait")
        cmd.extend(["--install", release_name, str(chart_path)])
        return cmd

    def upgrade_install(
        self,
        release_name: str,
        chart_path: Path,
        *,
        overrides: Sequence[SetOverride] = (),
        wait: bool = True,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Deploy or upgrade a Helm release.

        Uses `helm upgrade --install` to idempotently deploy a chart.
        If the release doesn't exist, it will be installed. If it exists,
        it will be upgraded with forced pod recreation.

        Args:
            release_name: Name for the Helm release (e.g., "review-my-app")
            chart_path: Path to the Helm chart directory
            overrides: Value overrides passed as --set/--set-string flags
            wait: Whether to wait for resources to be ready
            on_output: Optional callback for real-time output streaming.
                      If provided, each line of output is passed to this function.

        Returns:
            CommandResult with deployment status

        Example:
            >>> helm.upgrade_install(
            ...     "review-my-app",
            ...     Path("./helm-chart/my-app"),
            ...     overrides=[SetOverride("image.tag", "abc1234")],
            ... )
        """
        cmd = self.build_upgrade_install(
            release_name, chart_path, overrides=overrides, wait=wait
        )

        if on_output:
            return self._runner.run_streaming(cmd, on_output=on_output)
        return self._runner.run(cmd, capture_output=False)
