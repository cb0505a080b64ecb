"""CI deployment pipeline using Helm with a local Tiller.

This module provides the CIDeployer class which runs the deployment steps
in a fixed order. It coordinates specialized components for:
- Environment validation
- kubectl login
- Tiller start-up and Helm client initialization
- Chart linting and release deployment
- Rollout monitoring

The first failing step ends the run; nothing after it is attempted.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from .cluster_login import ClusterLogin
from .constants import DeploymentConstants, DeploymentPaths
from .dry_run import DryRunGate
from .environment import EnvironmentValidator
from .errors import DeploymentError
from .helm_init import HelmInitializer
from .helm_release import HelmReleaseManager
from .rollout import RolloutWatcher

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

    from ..shell_commands import ShellCommands
    from .settings import DeploySettings


class CIDeployer:
    """Runs the CI deployment pipeline for one project and environment.

    The deployment workflow consists of:
    1. Validate required, defaultable, deploy-arg, login and registry variables
    2. Log kubectl into the project namespace
    3. Start Tiller and initialize the Helm client
    4. Lint the chart
    5. Deploy via helm upgrade --install
    6. Watch the rollout
    7. Decommission Tiller

    Attributes:
        settings: Settings for this run
        commands: Shell command executor
        validator: Environment validator
        cluster_login: kubectl login
        helm_init: Tiller and Helm client lifecycle
        helm_release: Chart lint and release deployment
        rollout: Rollout watcher
    """

    def __init__(
        self,
        console: CLIConsole,
        settings: DeploySettings,
        commands: ShellCommands,
        constants: DeploymentConstants | None = None,
        sleep: Callable[[float], None] | None = None,
        paths: DeploymentPaths | None = None,
    ) -> None:
        """Initialize the CI deployer.

        Args:
            console: Console for output
            settings: Settings for this run
            commands: Shell command executor
            constants: Optional deployment constants
            sleep: Optional sleep function shared by waiting steps
            paths: Optional path resolver (derived from settings by default)
        """
        self.console = console
        self.settings = settings
        self.commands = commands
        self.constants = constants or DeploymentConstants()
        self.paths = paths or DeploymentPaths(
            settings.ci_project_dir, settings.ci_project_name
        )
        self.dry_run = DryRunGate(settings.dry_run, console)

        waits = {"sleep": sleep} if sleep is not None else {}

        self.validator = EnvironmentValidator(settings, console, self.constants)
        self.cluster_login = ClusterLogin(
            commands, console, settings, self.dry_run, self.constants
        )
        self.helm_init = HelmInitializer(
            commands, console, self.dry_run, self.constants, **waits
        )
        self.helm_release = HelmReleaseManager(
            commands, console, settings, self.dry_run, self.paths
        )
        self.rollout = RolloutWatcher(
            commands, console, settings, self.dry_run, self.constants, **waits
        )

    # =========================================================================
    # Public Interface
    # =========================================================================

    def validate(self) -> None:
        """Run every environment check without touching any external tool."""
        self.validator.validate_all()

    def lint(self) -> None:
        """Validate the chart location variables and lint the chart."""
        self.validator.check_required(self.constants.REQUIRED_ENVIRONMENT)
        self._step(self.helm_release.lint_template, "linting failed")

    def run(self) -> None:
        """Run the full pipeline.

        Raises:
            DeploymentError: From the first step that fails
        """
        self.validate()

        self._step(self.cluster_login.login, "could not login kubectl")

        with self.helm_init.session():
            self._step(
                self.helm_init.init_helm_with_tiller, "could not initialize helm"
            )
            self._step(self.helm_release.lint_template, "linting failed")
            self._step(self.helm_release.deploy_template, "could not deploy template")
            self._step(self.rollout.watch_deployment, "could not watch deployment")

        self.console.ok("ALL Complete!")

    # =========================================================================
    # Private Helpers
    # =========================================================================

    def _step(self, action: Callable[[], object], failure: str) -> None:
        """Run one step, reporting its own error before the step-level one."""
        try:
            action()
        except DeploymentError as e:
            if e.message == failure:
                raise
            self.console.error(e.message)
            raise DeploymentError(failure, details=e.details) from e
