"""Deployment settings read from the CI job environment.

The environment is read exactly once, at the CLI boundary, into an
immutable DeploySettings instance that every pipeline step receives.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.cli.shared.console import LogLevel

DEPLOY_ARGS_VARIABLE = "PROJECT_SPECIFIC_DEPLOY_ARGS"

# Environment variable -> settings field
ENVIRONMENT_FIELDS: dict[str, str] = {
    "PROJECT_NAMESPACE": "project_namespace",
    "HELM_TOKEN": "helm_token",
    "HELM_USER": "helm_user",
    "CLUSTER_SERVER": "cluster_server",
    "CI_PROJECT_NAME": "ci_project_name",
    "CI_PROJECT_DIR": "ci_project_dir",
    "CI_COMMIT_REF_SLUG": "ci_commit_ref_slug",
    "CI_REGISTRY_IMAGE": "ci_registry_image",
    "CI_ENVIRONMENT_NAME": "ci_environment_name",
    "CI_JOB_ID": "ci_job_id",
    "CI_COMMIT_SHORT_SHA": "ci_commit_short_sha",
    "CI_ENVIRONMENT_SLUG": "ci_environment_slug",
    "CI_ENVIRONMENT_URL": "ci_environment_url",
    "CI_PROJECT_VISIBILITY": "ci_project_visibility",
    "CI_REGISTRY": "ci_registry",
    "CI_DEPLOY_USER": "ci_deploy_user",
    "CI_DEPLOY_PASSWORD": "ci_deploy_password",
    "DEPLOYMENT_NAME": "deployment_name",
    "WATCH_DEPLOYMENT": "watch_deployment",
}

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def parse_flag(value: str | None) -> bool:
    """Interpret an environment flag such as DRY_RUN.

    Any non-empty value enables the flag, except the usual spellings of false.
    """
    if not value:
        return False
    return value.strip().lower() not in _FALSE_VALUES


class DeploySettings(BaseModel):
    """Immutable view of the CI environment for one pipeline run."""

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = LogLevel.UNRECOGNIZED
    dry_run: bool = False

    project_namespace: str = ""
    helm_token: str = Field(default="", repr=False)
    helm_user: str = ""
    cluster_server: str = ""

    ci_project_name: str = ""
    ci_project_dir: str = ""
    ci_commit_ref_slug: str = ""
    ci_registry_image: str = ""
    ci_environment_name: str = ""
    ci_job_id: str = ""
    ci_commit_short_sha: str = ""
    ci_environment_slug: str = ""
    ci_environment_url: str = ""
    ci_project_visibility: str = ""
    ci_registry: str = ""
    ci_deploy_user: str = ""
    ci_deploy_password: str = Field(default="", repr=False)

    deployment_name: str = ""
    watch_deployment: str = ""

    # Names listed in PROJECT_SPECIFIC_DEPLOY_ARGS, in order
    deploy_arg_names: tuple[str, ...] = ()

    # Every variable referenced by the pipeline, by its environment name
    variables: dict[str, str] = Field(default_factory=dict, repr=False)

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return LogLevel.parse(value)
        return value

    @field_validator("dry_run", mode="before")
    @classmethod
    def _parse_dry_run(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return parse_flag(value)
        return value

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str],
        *,
        log_level: str | LogLevel | None = None,
        dry_run: bool | None = None,
    ) -> DeploySettings:
        """Build settings from an environment mapping.

        Args:
            environ: Environment variables (usually os.environ)
            log_level: Overrides LOG_LEVEL when given
            dry_run: Overrides DRY_RUN when given

        Returns:
            Frozen settings for one pipeline run
        """
        deploy_arg_names = tuple(environ.get(DEPLOY_ARGS_VARIABLE, "").split())

        variables = {
            name: environ.get(name, "")
            for name in (*ENVIRONMENT_FIELDS, *deploy_arg_names)
        }
        values: dict[str, Any] = {
            field: variables[name] for name, field in ENVIRONMENT_FIELDS.items()
        }

        settings = cls(
            log_level=log_level if log_level is not None else environ.get("LOG_LEVEL"),
            dry_run=dry_run if dry_run is not None else environ.get("DRY_RUN"),
            deploy_arg_names=deploy_arg_names,
            variables=variables,
            **values,
        )
        logger.debug(
            f"Loaded settings: {len(variables)} variables, "
            f"{len(deploy_arg_names)} project specific deploy args"
        )
        return settings

    def value(self, name: str) -> str:
        """Get the value of an environment variable by name ("" if unset)."""
        field = ENVIRONMENT_FIELDS.get(name)
        if field is not None:
            return str(getattr(self, field))
        return self.variables.get(name, "")

    def is_set(self, name: str) -> bool:
        """Check that a variable is set to a non-empty value."""
        return bool(self.value(name))

    @property
    def is_public(self) -> bool:
        """Whether the project is publicly visible (no registry credentials needed)."""
        return self.ci_project_visibility == "public"
