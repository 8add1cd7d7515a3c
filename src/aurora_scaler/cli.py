# cli.py
import json
import logging

import click
from botocore.exceptions import BotoCoreError, ClientError

from aurora_scaler.aws.rds import get_rds_gateway
from aurora_scaler.capacity import PassSummary
from aurora_scaler.config.settings import CapacityConfigError, get_settings
from aurora_scaler.lambda_handler import run_scheduled_pass
from aurora_scaler.modes import ScalingMode
from aurora_scaler.status import fleet_status

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", is_flag=True, help="Verbose logging")
def cli(verbose):
    """Run Aurora Serverless v2 pre-warm / cool-down passes by hand"""
    log_level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(level=log_level, format='%(levelname)s: %(message)s')


def _print_summary(summary: PassSummary, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    counts = summary.counts()
    click.echo(f"🔧 Clusters tagged {summary.predicate} → "
               f"{summary.setting.min_capacity}-{summary.setting.max_capacity} ACU")
    click.echo("=" * 50)
    for result in summary.results:
        line = f"  {result.cluster_id}: {result.outcome.value}"
        if result.error:
            line += f" ({result.error})"
        click.echo(line)
    click.echo("=" * 50)
    click.echo(f"Inspected {counts['inspected']}, updated {counts['updated']}, "
               f"dry-run {counts['dry_run']}, failed {counts['failed']}")


def _run_mode(mode, min_capacity, max_capacity, dry_run, as_json):
    settings = get_settings()
    overrides = {}
    if min_capacity is not None:
        overrides['min_capacity'] = min_capacity
    if max_capacity is not None:
        overrides['max_capacity'] = max_capacity
    if dry_run:
        overrides['dry_run'] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        summary = run_scheduled_pass(mode, settings=settings)
    except CapacityConfigError as e:
        raise click.BadParameter(str(e))
    except (ClientError, BotoCoreError) as e:
        raise click.ClickException(f"{mode.value} pass aborted: {e}")

    _print_summary(summary, as_json)
    if summary.failed:
        raise SystemExit(1)


def _mode_command(mode: ScalingMode, help_text: str):
    @cli.command(name=mode.value, help=help_text)
    @click.option("--min-capacity", type=click.IntRange(min=1), default=None,
                  help="Minimum ACU (overrides MIN_CAPACITY)")
    @click.option("--max-capacity", type=click.IntRange(min=1), default=None,
                  help="Maximum ACU (overrides MAX_CAPACITY)")
    @click.option("--dry-run", is_flag=True, help="Show matching clusters without modifying them")
    @click.option("--json", "as_json", is_flag=True, help="Output as JSON")
    def command(min_capacity, max_capacity, dry_run, as_json):
        _run_mode(mode, min_capacity, max_capacity, dry_run, as_json)
    return command


prewarm = _mode_command(
    ScalingMode.PREWARM,
    "Apply the pre-warm range to clusters tagged prewarm=yes",
)
cooldown = _mode_command(
    ScalingMode.COOLDOWN,
    "Apply the cool-down range to clusters tagged cooldown=yes",
)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def status(as_json):
    """Show Serverless v2 clusters, their ACU range and opt-in tags"""
    try:
        report = fleet_status(get_rds_gateway())
    except (ClientError, BotoCoreError) as e:
        raise click.ClickException(f"Failed to read cluster status: {e}")

    if as_json:
        click.echo(json.dumps(report, indent=2, default=str))
        return

    if not report:
        click.echo("No Serverless v2 clusters found")
        return

    click.echo("🔧 Aurora Serverless v2 Clusters")
    click.echo("=" * 50)
    for entry in report:
        tags = [mode.value for mode in ScalingMode if entry[mode.value]]
        click.echo(f"\n📊 Cluster: {entry['cluster_id']}")
        click.echo(f"   Engine: {entry['engine']}  Status: {entry['status']}")
        click.echo(f"   Range: {entry['min_capacity']}-{entry['max_capacity']} ACU (min-max)")
        click.echo(f"   Scheduled: {', '.join(tags) if tags else 'none'}")
    click.echo("\n" + "=" * 50)


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  Deployment Mode: {settings.deployment_mode}")
    click.echo(f"  AWS Region: {settings.aws_region}")
    click.echo(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    click.echo(f"  Dry Run: {settings.dry_run}")
    click.echo(f"  Log Level: {settings.log_level}")
    for mode in ScalingMode:
        try:
            setting = settings.capacity_for(mode)
        except CapacityConfigError as e:
            click.echo(f"  {mode.value} ({mode.predicate}): invalid - {e}")
            continue
        click.echo(f"  {mode.value} ({mode.predicate}): "
                   f"MinCapacity {setting.min_capacity}, MaxCapacity {setting.max_capacity}")


if __name__ == "__main__":
    cli()
