"""CLI entry point for wpdeploy.

Defines the main CLI group. Subcommands are imported only when invoked so
that `wpdeploy --help` stays fast inside deployment hooks.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from wpdeploy_cli import __version__
from wpdeploy_cli.output import set_no_color
from wpdeploy_core.observability import LOG_LEVELS, configure_logging

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attribute" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return eagerly registered and lazy command names, sorted."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing its module on first use."""
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "validate": "wpdeploy_cli.commands.validate.validate",
    "explain": "wpdeploy_cli.commands.explain.explain",
    "subscription": "wpdeploy_cli.commands.subscription.subscription",
}


def _configure_logging(ctx: click.Context, param: click.Parameter, value: str) -> str:
    configure_logging(log_level=value)
    return value


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="wpdeploy")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Structured log level (logs go to stderr) [default: WARNING]",
    expose_value=False,
    callback=_configure_logging,
)
def cli() -> None:
    """wpdeploy - WordPress on Azure Container Apps deployment checks.

    Validate deployment parameters before any Azure resource is created.

    **Getting Started:**

    - `wpdeploy validate` - Check environment name, site name and MySQL credentials
    - `wpdeploy explain` - Show projected resource name lengths
    - `wpdeploy subscription` - Verify the active subscription matches azd

    **In an azd hook:**

    - `azd env get-values | wpdeploy validate --env-file -`
    """
    pass


if __name__ == "__main__":
    cli()
