"""
CLI mirror commands — mirror one version, mirror everything since a floor.

Usage:
    python -m distmirror.main mirror [--version 8.5] [--distribution bin|all] [--json]
    python -m distmirror.main mirror-all [--from-version 8.0] [--distribution bin|all] [--dry-run] [--json]
    python -m distmirror.main versions [--from-version 8.0] [--distribution bin|all] [--json]
    python -m distmirror.main latest
"""

from __future__ import annotations

import json as json_lib

import click

from ..errors import ConfigurationError, FetchError

STATUS_ICONS = {"mirrored": "✅", "skipped": "⏭️", "failed": "❌"}


def _manager(ctx: click.Context):
    from ..mirror.manager import MirrorManager

    return MirrorManager.from_settings(ctx.obj["settings"])


def _echo_plan(settings, plan) -> None:
    if not plan:
        click.echo("  No versions at or above the floor.")
        return
    for version, done in plan:
        icon = "✅" if done else "⏳"
        state = "mirrored" if done else "pending"
        click.echo(f"  {icon} {settings.display_product} {version}: {state}")


@click.command("mirror")
@click.option("--version", "version_text", default=None, help="Version to mirror (default: latest)")
@click.option("--distribution", default=None, help="Distribution type: bin or all")
@click.option("--json", "as_json", is_flag=True, help="Output the receipt as JSON")
@click.pass_context
def mirror(ctx: click.Context, version_text: str, distribution: str, as_json: bool) -> None:
    """Download one distribution and record it as mirrored."""
    settings = ctx.obj["settings"]
    manager = _manager(ctx)
    distribution = distribution or settings.default_distribution

    if not version_text:
        click.echo("No version specified, fetching latest version...")
        version_text = str(manager.catalog.latest())

    try:
        receipt = manager.mirror_version(version_text, distribution)
    except (ConfigurationError, FetchError) as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json_lib.dumps(receipt.model_dump(), indent=2, default=str))
        return

    icon = STATUS_ICONS[receipt.status]
    if receipt.is_skipped:
        click.echo(
            f"{icon} {settings.display_product} {receipt.version}-{receipt.distribution} "
            "already mirrored (tag exists), skipping"
        )
        return

    click.secho(f"{icon} Mirrored {receipt.artifact_id}", fg="green")
    click.echo(f"   Archive: {receipt.path}")
    for warning in receipt.warnings:
        click.secho(f"   ⚠️  {warning}", fg="yellow")


@click.command("mirror-all")
@click.option("--from-version", default=None, help="Lowest version to mirror (inclusive)")
@click.option("--distribution", default=None, help="Distribution type: bin or all")
@click.option("--dry-run", is_flag=True, help="Show what would be mirrored")
@click.option("--json", "as_json", is_flag=True, help="Output the batch result as JSON")
@click.pass_context
def mirror_all(
    ctx: click.Context,
    from_version: str,
    distribution: str,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Mirror every version from --from-version to the latest."""
    settings = ctx.obj["settings"]
    manager = _manager(ctx)
    from_version = from_version or settings.default_from_version
    distribution = distribution or settings.default_distribution

    try:
        if dry_run:
            plan = manager.plan(from_version, distribution)
        else:
            result = manager.mirror_all(from_version, distribution)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    if dry_run:
        click.echo(f"\n📋 {len(plan)} versions from {from_version} ({distribution}):\n")
        _echo_plan(settings, plan)
        click.secho("\n(Dry run — nothing downloaded)", fg="cyan")
        return

    if as_json:
        click.echo(json_lib.dumps(result.to_dict(), indent=2, default=str))
        return

    click.echo()
    for receipt in result.receipts:
        line = f"  {STATUS_ICONS[receipt.status]} {receipt.artifact_id}: {receipt.status}"
        if receipt.error:
            line += f" — {receipt.error.message[:80]}"
        click.echo(line)

    click.echo("\n🎉 Batch mirroring completed!")
    click.echo(f"   ✅ Mirrored: {result.mirrored} versions")
    click.echo(f"   ⏭️ Skipped: {result.skipped} versions")
    click.echo(f"   ❌ Failed: {result.failed} versions")


@click.command("versions")
@click.option("--from-version", default=None, help="Lowest version to list (inclusive)")
@click.option("--distribution", default=None, help="Distribution type: bin or all")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def versions(ctx: click.Context, from_version: str, distribution: str, as_json: bool) -> None:
    """List upstream versions and whether they are mirrored."""
    settings = ctx.obj["settings"]
    manager = _manager(ctx)
    from_version = from_version or settings.default_from_version
    distribution = distribution or settings.default_distribution

    try:
        plan = manager.plan(from_version, distribution)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    if as_json:
        data = [{"version": str(v), "mirrored": done} for v, done in plan]
        click.echo(json_lib.dumps(data, indent=2))
        return

    click.echo(f"\n📦 {settings.display_product} versions from {from_version} ({distribution})\n")
    _echo_plan(settings, plan)
    click.echo()


@click.command("latest")
@click.pass_context
def latest(ctx: click.Context) -> None:
    """Print the latest upstream version."""
    click.echo(str(_manager(ctx).catalog.latest()))
