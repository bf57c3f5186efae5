"""
Distribution Mirror — CLI Entry Point

Usage:
    python -m distmirror.main mirror --version 8.5
    python -m distmirror.main mirror-all --from-version 8.0
    python -m distmirror.main versions
"""

from __future__ import annotations

# Load .env file FIRST, before any other imports that might read env vars
from pathlib import Path
from dotenv import load_dotenv

_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

from typing import Optional

import click

from .logging_config import setup_logging
from .mirror.config import MirrorSettings
from .cli.mirror import latest, mirror, mirror_all, versions

# Initialize logging
setup_logging()


@click.group()
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Git repository holding the mirror tags (default: current directory)",
)
@click.pass_context
def cli(ctx: click.Context, root: Optional[Path]) -> None:
    """Distribution Mirror — Copy upstream release archives, tag what is done."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = (root or Path.cwd()).resolve()
    ctx.obj["settings"] = MirrorSettings.from_env(ctx.obj["root"])


cli.add_command(mirror)
cli.add_command(mirror_all)
cli.add_command(versions)
cli.add_command(latest)


if __name__ == "__main__":
    cli()
