"""Entry point for running xform_submissions as a module.

This allows the package to be executed as:
    python -m xform_submissions
"""

from xform_submissions.cli.main import cli

if __name__ == "__main__":
    cli()
