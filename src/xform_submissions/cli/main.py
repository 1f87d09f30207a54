"""Main CLI entry point for the XForm submissions utility.

This module provides the main Click command group for the xform-submissions CLI.
"""

from pathlib import Path
from typing import Optional

import click

from xform_submissions import __version__
from xform_submissions.cli.submission_commands import inspect_command, scan_command
from xform_submissions.config import load_config
from xform_submissions.logging_audit import configure_logging
from xform_submissions.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="xform-submissions")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--no-redact",
    is_flag=True,
    help="Do not redact encryption keys and signatures from logs",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    no_redact: bool,
) -> None:
    """XForm Submissions - Metadata extraction for XForm submissions.

    Reads form identity, version, submission dates, encryption artifacts
    and media attachments from submission documents.

    Common usage:

        # Show the metadata of one submission
        xform-submissions inspect instances/uuid1/submission.xml

        # Read every submission of a form
        xform-submissions scan forms/household-survey

        # Enable verbose logging for debugging
        xform-submissions --verbose scan forms/household-survey

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)
    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose

    # Precedence: CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file
    redact_secrets = False if no_redact else config_obj.logging.redact_secrets

    configure_logging(
        level=log_level, log_file=log_file_path, redact_secrets=redact_secrets
    )


cli.add_command(inspect_command)
cli.add_command(scan_command)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        xform-submissions config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")

    click.echo("\nSubmissions:")
    click.echo(f"  Submission file:   {config_obj.submissions.submission_file_name}")
    click.echo(f"  Instances dir:     {config_obj.submissions.instances_dir_name}")
    click.echo(f"  Skip invalid:      {config_obj.submissions.skip_invalid}")
    click.echo(f"  Instance ID from:  {config_obj.submissions.instance_id_fallback}")

    click.echo("\nLogging:")
    click.echo(f"  Level:             {config_obj.logging.level}")
    click.echo(f"  Log file:          {config_obj.logging.log_file}")
    click.echo(f"  Redact secrets:    {config_obj.logging.redact_secrets}")


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"xform-submissions version {__version__}")


if __name__ == "__main__":
    cli()
