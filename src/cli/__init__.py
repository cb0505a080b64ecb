"""Main CLI application module.

This module provides the main entry point for the Helm CI deployer.

Commands:
- run: Full deployment pipeline
- validate: Environment checks only
- lint: Chart lint only
- deploy-args: Show computed --set flags
"""

from .commands import ci_app

# The CI command group is the whole application
app = ci_app


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
