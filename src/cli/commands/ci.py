"""CI deployment commands.

This module provides the commands a CI job runs to deploy the project's
Helm chart, plus helpers for checking a job's configuration.
"""

from typing import Annotated

import typer

from src.cli.context import build_cli_context, get_cli_context
from src.cli.deployment.helm_deployer import (
    image_pull_settings,
    project_specific_deploy_args,
)
from src.cli.shared.console import with_error_handling

app = typer.Typer(no_args_is_help=True, rich_markup_mode="rich")


@app.callback()
def main_options(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            envvar="LOG_LEVEL",
            help="Console verbosity: error, warn, debug or info",
        ),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Log mutating steps instead of running them (default: DRY_RUN)",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Deploy a Helm chart from a CI job with a local Tiller."""
    ctx.obj = build_cli_context(log_level=log_level, dry_run=dry_run)


@app.command()
@with_error_handling
def run(ctx: typer.Context) -> None:
    """Run the full deployment pipeline.

    This command:
    - Validates the job environment
    - Logs kubectl into the project namespace
    - Starts a local Tiller and initializes Helm
    - Lints and deploys the chart via helm upgrade --install
    - Waits for the rollout and describes the deployed resources

    Examples:
        helm-ci-deployer run
        LOG_LEVEL=info DRY_RUN=1 helm-ci-deployer run
    """
    get_cli_context(ctx).deployer().run()


@app.command()
@with_error_handling
def validate(ctx: typer.Context) -> None:
    """Check that every required environment variable is set."""
    cli = get_cli_context(ctx)
    cli.deployer().validate()
    cli.console.ok("environment is complete")


@app.command()
@with_error_handling
def lint(ctx: typer.Context) -> None:
    """Lint the project chart at CI_PROJECT_DIR/helm-chart/CI_PROJECT_NAME."""
    get_cli_context(ctx).deployer().lint()


@app.command(name="deploy-args")
@with_error_handling
def deploy_args(ctx: typer.Context) -> None:
    """Print the registry and project specific --set flags.

    Printed to stdout regardless of log level so the output can be captured.
    """
    cli = get_cli_context(ctx)
    cli.deployer().validator.check_deploy_args()
    for override in [
        *image_pull_settings(cli.settings),
        *project_specific_deploy_args(cli.settings),
    ]:
        typer.echo(str(override))
