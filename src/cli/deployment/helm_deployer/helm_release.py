"""Helm chart linting and release deployment."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

from rich.markup import escape

from ..shell_commands import HelmCommands
from .constants import DeploymentPaths
from .errors import ExternalCommandFailure
from .overrides import (
    deployment_name,
    image_pull_settings,
    project_specific_deploy_args,
    release_overrides,
)

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

    from ..shell_commands import SetOverride, ShellCommands
    from .dry_run import DryRunGate
    from .settings import DeploySettings


class HelmReleaseManager:
    """Lints the project chart and deploys it as a Helm release.

    Handles:
    - Static chart validation via helm lint
    - Composition of all value overrides for the release
    - Deployment via helm upgrade --install (or rendering it for dry runs)
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        settings: DeploySettings,
        dry_run: DryRunGate,
        paths: DeploymentPaths | None = None,
    ) -> None:
        """Initialize the Helm release manager.

        Args:
            commands: Shell command executor
            console: Console for output
            settings: Settings for this run
            dry_run: Dry-run gate
            paths: Optional path resolver (derived from settings by default)
        """
        self.commands = commands
        self.console = console
        self.settings = settings
        self.dry_run = dry_run
        self.paths = paths or DeploymentPaths(
            settings.ci_project_dir, settings.ci_project_name
        )

    @property
    def release_name(self) -> str:
        return deployment_name(self.settings)

    def overrides(self) -> list[SetOverride]:
        """All value overrides for the release, in command-line order."""
        return [
            *release_overrides(self.settings),
            *image_pull_settings(self.settings),
            *project_specific_deploy_args(self.settings),
        ]

    def deploy_command(self) -> list[str]:
        """The full helm upgrade --install command for this release."""
        return HelmCommands.build_upgrade_install(
            self.release_name,
            self.paths.helm_chart,
            overrides=self.overrides(),
        )

    def lint_template(self) -> None:
        """Lint the project chart.

        Raises:
            ExternalCommandFailure: If helm lint reports errors
        """
        self.console.info("linting template")
        if self.dry_run.skip():
            return
        result = self.commands.helm.lint(self.paths.helm_chart)
        if not result.success:
            raise ExternalCommandFailure("linting failed", result)

    def deploy_template(self) -> None:
        """Upgrade or install the release, waiting until it is ready.

        In dry-run mode the command line is logged instead of executed.

        Raises:
            ExternalCommandFailure: If helm upgrade fails
        """
        self.console.info(f"deploying {self.release_name} from template")
        if self.dry_run.skip():
            self.console.info(shlex.join(self.deploy_command()))
            return

        def print_helm_output(line: str) -> None:
            self.console.print(f"  [dim]{escape(line)}[/dim]")

        result = self.commands.helm.upgrade_install(
            self.release_name,
            self.paths.helm_chart,
            overrides=self.overrides(),
            on_output=print_helm_output,
        )
        if not result.success:
            raise ExternalCommandFailure("could not deploy template", result)
