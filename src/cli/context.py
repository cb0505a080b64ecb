"""CLI context and dependency container."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

import click
import typer

from src.cli.deployment.helm_deployer import (
    CIDeployer,
    DeploymentConstants,
    DeploymentPaths,
    DeploySettings,
)
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.console import CLIConsole, LogLevel, console
from src.cli.shared.log_setup import configure_logging


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    settings: DeploySettings
    commands: ShellCommands
    constants: DeploymentConstants
    paths: DeploymentPaths

    def deployer(self) -> CIDeployer:
        """Create the pipeline for this context."""
        return CIDeployer(
            self.console,
            self.settings,
            self.commands,
            self.constants,
            paths=self.paths,
        )


def build_cli_context(
    log_level: str | None = None,
    dry_run: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> CLIContext:
    """Build a fresh CLIContext from the process environment.

    Args:
        log_level: Overrides LOG_LEVEL
        dry_run: Overrides DRY_RUN
        environ: Environment to read (defaults to os.environ)
    """
    environ = os.environ if environ is None else environ
    configure_logging(
        LogLevel.parse(log_level if log_level is not None else environ.get("LOG_LEVEL"))
    )
    settings = DeploySettings.from_environ(
        environ,
        log_level=log_level,
        dry_run=dry_run,
    )
    console.level = settings.log_level

    constants = DeploymentConstants()
    paths = DeploymentPaths(settings.ci_project_dir, settings.ci_project_name)

    return CLIContext(
        console=console,
        settings=settings,
        commands=ShellCommands(
            paths.project_dir, env=constants.tiller_env(settings.project_namespace)
        ),
        constants=constants,
        paths=paths,
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()


__all__ = ["CLIContext", "build_cli_context", "get_cli_context"]
