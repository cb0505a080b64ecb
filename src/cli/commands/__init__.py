"""CLI command modules.

Command Groups:
- ci: Deployment pipeline commands run from a CI job
"""

from .ci import app as ci_app

__all__ = ["ci_app"]
