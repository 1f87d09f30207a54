"""Submission CLI commands for the XForm submissions utility.

This module provides CLI commands to inspect a single submission document
and to scan every submission of a form directory.
"""

import json as json_lib
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from xform_submissions.config.schema import SubmissionsConfig
from xform_submissions.models.submission import SubmissionMetadata
from xform_submissions.submission.reader import (
    read_submission,
    resolve_instance_id,
    scan_form_submissions,
)
from xform_submissions.utils.exceptions import XFormSubmissionError

logger = logging.getLogger(__name__)


def _submissions_config(ctx: click.Context) -> SubmissionsConfig:
    config = (ctx.obj or {}).get("config")
    return config.submissions if config is not None else SubmissionsConfig()


def _silence_console_logging() -> None:
    """Keep console log lines out of machine-readable output."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.StreamHandler) and not hasattr(handler, "baseFilename"):
            handler.setLevel(logging.CRITICAL + 1)


def _format_metadata(metadata: SubmissionMetadata) -> str:
    lines = [
        f"Form ID:         {metadata.key.form_id}",
        f"Version:         {metadata.key.version or '-'}",
        f"Instance ID:     {metadata.key.instance_id}",
        f"Submission file: {metadata.submission_file}",
        f"Submitted:       {metadata.submission_date.isoformat() if metadata.submission_date else '-'}",
        f"Encrypted:       {'yes' if metadata.is_encrypted else 'no'}",
    ]
    if metadata.is_encrypted:
        lines.append(f"Encrypted file:  {metadata.encrypted_xml_file}")
    if metadata.attachments:
        lines.append("Attachments:")
        lines.extend(f"  - {name}" for name in metadata.attachments)
    else:
        lines.append("Attachments:     none")
    return "\n".join(lines)


@click.command("inspect")
@click.argument("submission_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--instance-id",
    default=None,
    help="Instance ID to use instead of the one found in the document",
)
@click.option("--json", "json_output", is_flag=True, help="Output metadata as JSON")
@click.pass_context
def inspect_command(
    ctx: click.Context,
    submission_file: Path,
    instance_id: Optional[str],
    json_output: bool,
) -> None:
    """Show the metadata of one submission document.

    Exits with code 0 on success, code 1 if the metadata cannot be extracted.

    Examples:

        # Human-readable summary
        xform-submissions inspect instances/uuid1/submission.xml

        # JSON output for automation
        xform-submissions inspect instances/uuid1/submission.xml --json
    """
    if json_output:
        _silence_console_logging()

    config = _submissions_config(ctx)
    try:
        metadata = read_submission(submission_file)
        if instance_id is None:
            instance_id = resolve_instance_id(
                metadata, submission_file, config.instance_id_fallback
            )
        if instance_id is None:
            click.secho(
                f"No instance ID found in {submission_file}. Use --instance-id to provide one.",
                fg="red",
                err=True,
            )
            sys.exit(1)
        frozen = metadata.freeze(instance_id, submission_file)
    except XFormSubmissionError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        logger.error(f"Failed to inspect {submission_file}: {e}")
        sys.exit(1)

    if json_output:
        click.echo(json_lib.dumps(frozen.to_dict(), indent=2))
    else:
        click.echo(_format_metadata(frozen))


@click.command("scan")
@click.argument("form_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.option("--fail-fast", is_flag=True, help="Stop at the first invalid submission")
@click.pass_context
def scan_command(
    ctx: click.Context,
    form_dir: Path,
    json_output: bool,
    fail_fast: bool,
) -> None:
    """Read the metadata of every submission in a form directory.

    Exits with code 1 if any submission could not be read.

    Examples:

        xform-submissions scan forms/household-survey

        xform-submissions scan forms/household-survey --json --fail-fast
    """
    if json_output:
        _silence_console_logging()

    config = _submissions_config(ctx)
    if fail_fast:
        config = config.model_copy(update={"skip_invalid": False})

    try:
        result = scan_form_submissions(form_dir, config)
    except XFormSubmissionError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    if json_output:
        click.echo(json_lib.dumps(result.to_dict(), indent=2))
    else:
        click.echo(f"Form directory: {form_dir}")
        click.echo(f"Submissions:    {result.total}")
        click.secho(f"  Read:         {len(result.submissions)}", fg="green")
        if result.skipped:
            click.secho(f"  Skipped:      {len(result.skipped)}", fg="yellow")
        if result.has_failures:
            click.secho(f"  Failed:       {len(result.failures)}", fg="red")
            for path, error_info in result.failures.items():
                click.echo(f"    {path}: {error_info.message}")
                click.echo(f"      Fix: {error_info.remediation}")

    if result.has_failures:
        sys.exit(1)
