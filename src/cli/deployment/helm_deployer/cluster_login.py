"""kubectl authentication for the deploy namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import DeploymentConstants
from .errors import ExternalCommandFailure

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

    from ..shell_commands import CommandResult, ShellCommands
    from .dry_run import DryRunGate
    from .settings import DeploySettings


class ClusterLogin:
    """Configures and activates a kubeconfig context for the CI service account.

    The context is named ``<namespace>-deploy`` and binds the namespace to
    the ``ci_kube`` cluster entry and a bearer-token user. kubeconfig
    changes persist after the run.
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        settings: DeploySettings,
        dry_run: DryRunGate,
        constants: DeploymentConstants | None = None,
    ) -> None:
        self.commands = commands
        self.console = console
        self.settings = settings
        self.dry_run = dry_run
        self.constants = constants or DeploymentConstants()

    def login(self) -> None:
        """Configure cluster, credentials and context, then switch to it.

        Raises:
            ExternalCommandFailure: On the first kubectl command that fails;
                the remaining configuration is not attempted
        """
        s = self.settings
        self.console.info(f"authenticating {s.helm_user} in {s.project_namespace}")
        if self.dry_run.skip():
            return

        kubectl = self.commands.kubectl
        cluster = self.constants.CLUSTER_NAME
        context = self.constants.context_name(s.project_namespace)

        self._check(kubectl.set_cluster(cluster, s.cluster_server))
        self._check(kubectl.set_credentials(s.helm_user, s.helm_token))
        self._check(
            kubectl.set_context(
                context,
                cluster=cluster,
                namespace=s.project_namespace,
                user=s.helm_user,
            )
        )
        self._check(kubectl.use_context(context))

    def _check(self, result: CommandResult) -> None:
        if not result.success:
            raise ExternalCommandFailure("could not login kubectl", result)
