"""CLI interface for confswap."""

from __future__ import annotations

import sys
from contextlib import contextmanager

import click

from confswap import __version__
from confswap.config import ToolDescriptor
from confswap.errors import ConfswapError, RollbackFailedError
from confswap.logging_config import setup_logging
from confswap.names import CUSTOM
from confswap.profiles import (
    current_status,
    delete_profile,
    list_profiles,
    save_profile,
    switch_profile,
)
from confswap.store import ProfileStore
from confswap.tools import list_tools


def styled(text: str, **kwargs) -> str:
    return click.style(text, **kwargs)


def info(msg: str) -> None:
    click.echo(f"  {msg}")


def success(msg: str) -> None:
    click.echo(f"  {styled(msg, fg='green')}")


def warn(msg: str) -> None:
    click.echo(f"  {styled(msg, fg='yellow')}")


def error(msg: str) -> None:
    click.echo(styled(msg, fg="red"), err=True)


def heading(msg: str) -> None:
    click.echo(f"\n  {styled(msg, bold=True)}")


@contextmanager
def reported_errors():
    """Print an engine error once and exit with status 1."""
    try:
        yield
    except RollbackFailedError as e:
        error(f"Error: {e.cause}")
        for rollback_error in e.rollback_errors:
            error(f"Rollback error: {rollback_error}")
        error("The live config may be partially switched; inspect it manually.")
        sys.exit(1)
    except (ConfswapError, OSError, ValueError) as e:
        error(f"Error: {e}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="confswap")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
def cli(verbose: bool) -> None:
    """Save and switch between AI coding tool config profiles."""
    setup_logging(verbose)


def make_tool_group(tool: ToolDescriptor) -> click.Group:
    """Build the `confswap <tool> ...` command group for one tool."""

    @click.group(name=tool.name, help=f"Manage {tool.display_name} configuration profiles.")
    def group() -> None:
        pass

    @group.command()
    @click.argument("profile")
    @click.option("--force", "-f", is_flag=True, help="Overwrite existing profile.")
    def save(profile: str, force: bool) -> None:
        """Save the current configuration as a profile."""
        with reported_errors():
            save_profile(ProfileStore(tool), profile, force)
        success(f"Saved {tool.display_name} profile '{profile}'.")

    @group.command()
    @click.argument("profile")
    def switch(profile: str) -> None:
        """Switch the live configuration to a profile."""
        with reported_errors():
            switch_profile(ProfileStore(tool), profile)
        success(f"Switched {tool.display_name} to '{profile}'.")

    @group.command()
    def current() -> None:
        """Show the current profile."""
        with reported_errors():
            status = current_status(ProfileStore(tool))
        click.echo(status.render())

    @group.command("list")
    def list_cmd() -> None:
        """List saved profiles."""
        with reported_errors():
            names = list_profiles(ProfileStore(tool))
        if not names:
            warn(f"No {tool.display_name} profiles saved. Try: confswap {tool.name} save <name>")
            return
        for name in names:
            click.echo(name)

    @group.command()
    @click.argument("profile")
    def delete(profile: str) -> None:
        """Delete a profile."""
        with reported_errors():
            cleared = delete_profile(ProfileStore(tool), profile)
        success(f"Deleted {tool.display_name} profile '{profile}'.")
        if cleared:
            info(f"Deleted active profile; current profile is now {CUSTOM}.")

    return group


@cli.command("tools")
def tools_cmd() -> None:
    """Show supported tools and the files they manage."""
    heading("Supported tools")
    click.echo()

    for tool in list_tools():
        info(f"{styled(tool.name, bold=True)} ({tool.display_name})")
        for rel in tool.config_rel_paths:
            info(f"  ~/{rel}")
        click.echo()


for _tool in list_tools():
    cli.add_command(make_tool_group(_tool))
