"""Pre-deployment environment validation.

Each check raises on the first missing variable so the job log names
exactly what has to be configured in the CI project.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .constants import DeploymentConstants
from .errors import MissingDefaultableVariable, MissingRequiredVariable

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

    from .settings import DeploySettings


class EnvironmentValidator:
    """Validates that the CI job provides every variable the pipeline needs.

    Provides checks for:
    - Plain required variables
    - Variables that may fall back to another variable
    - Project specific deploy arguments listed in PROJECT_SPECIFIC_DEPLOY_ARGS
    - Cluster login credentials
    - Registry credentials for non-public projects
    """

    def __init__(
        self,
        settings: DeploySettings,
        console: CLIConsole,
        constants: DeploymentConstants | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            settings: Settings for this run
            console: Console for output
            constants: Optional deployment constants
        """
        self.settings = settings
        self.console = console
        self.constants = constants or DeploymentConstants()

    def check_required(self, names: Iterable[str]) -> None:
        """Require every named variable to be set and non-empty.

        Raises:
            MissingRequiredVariable: For the first variable that is unset or empty
        """
        for name in names:
            if not self.settings.is_set(name):
                raise MissingRequiredVariable(name)

    def check_default(self, pairs: Iterable[str]) -> None:
        """Require each ``primary:fallback`` pair to have at least one value.

        Raises:
            MissingDefaultableVariable: When neither side of a pair is set
        """
        for pair in pairs:
            primary, _, fallback = pair.partition(":")
            fallback = fallback or primary
            if not self.settings.is_set(primary) and not self.settings.is_set(
                fallback
            ):
                raise MissingDefaultableVariable(primary, fallback)

    def check_deploy_args(self) -> None:
        """Require every project specific deploy argument to be set.

        An empty PROJECT_SPECIFIC_DEPLOY_ARGS is valid.
        """
        for name in self.settings.deploy_arg_names:
            if not self.settings.is_set(name):
                raise MissingRequiredVariable(
                    name, f"missing Deployment ENVIRONMENT {name} required!"
                )

    def check_cluster_login(self) -> None:
        """Require the credentials used to log kubectl into the cluster."""
        self.check_required(self.constants.CLUSTER_LOGIN_ENVIRONMENT)

    def check_image_pull(self) -> None:
        """Require registry credentials unless the project is public."""
        if self.settings.is_public:
            return
        self.check_required(self.constants.IMAGE_PULL_ENVIRONMENT)

    def validate_all(self) -> None:
        """Run every environment check in pipeline order."""
        self.check_required(self.constants.REQUIRED_ENVIRONMENT)
        self.check_default(self.constants.DEFAULT_ENVIRONMENT)
        self.check_deploy_args()
        self.check_cluster_login()
        self.check_image_pull()
        self.console.debug("environment validated")
