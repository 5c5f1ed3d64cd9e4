import asyncio
import logging
from pathlib import Path

import click

from . import __version__
from .campaigns import get_campaign, list_campaigns
from .core import ConfigManager, ScenarioRunnerError
from .executor import EngineConfig, ReportCollector, ScenarioEngine, SessionConfig, SessionManager
from .storefront import StorefrontConfig


@click.group()
@click.option('--config', '-c', type=click.Path(), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Scenario Runner - browser-driven storefront scenarios"""
    # Load configuration
    config_path = Path(config) if config else None
    ctx.obj = ConfigManager(config_path)

    # Setup logging
    level = logging.DEBUG if verbose else getattr(logging, str(ctx.obj.get('general.log_level', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command()
def version():
    """Show version information"""
    click.echo(f"Scenario Runner v{__version__}")
    click.echo(f"Campaigns: {', '.join(c.name for c in list_campaigns())}")


@cli.command()
def campaigns():
    """List available campaigns"""
    for campaign in list_campaigns():
        click.echo(f"{campaign.name:<20} {campaign.description}")


@cli.command()
@click.argument('path', type=click.Path())
def init(path):
    """Write the default configuration to PATH"""
    target = Path(path)
    if target.exists():
        click.echo(f"Error: '{path}' already exists", err=True)
        raise SystemExit(1)

    # Target does not exist yet, so only the built-in defaults are loaded
    saved = ConfigManager(target).save(target)
    click.echo(f"✅ Wrote configuration: {saved}")


@cli.command()
@click.argument('name')
@click.option('--headless/--headed', default=None, help='Override the configured headless mode')
@click.option('--browser', '-b', type=click.Choice(['chromium', 'firefox', 'webkit']), help='Browser to use')
@click.option('--format', '-f', 'formats', multiple=True, type=click.Choice(ReportCollector.FORMATS),
              help='Report format (repeatable)')
@click.option('--output-dir', '-o', type=click.Path(), help='Report directory')
@click.pass_obj
def run(config, name, headless, browser, formats, output_dir):
    """
    Run a campaign

    Examples:
        scenario-runner run sort-products
        scenario-runner -c shop.yaml run sort-products --headed -f junit
    """
    try:
        campaign = get_campaign(name)
    except ScenarioRunnerError as e:
        click.echo(f"❌ {e}", err=True)
        raise SystemExit(2)

    formats = formats or config.get('reporter.formats', ['html'])
    if isinstance(formats, str):
        formats = [formats]
    unsupported = [f for f in formats if f not in ReportCollector.FORMATS]
    if unsupported:
        click.echo(f"❌ Unsupported report format: {', '.join(unsupported)}", err=True)
        raise SystemExit(2)

    session_config = SessionConfig.from_dict(config.get_section('session'))
    if headless is not None:
        session_config.headless = headless
    if browser:
        session_config.browser = browser

    engine = ScenarioEngine(
        session_manager=SessionManager(session_config),
        config=EngineConfig.from_dict(config.get_section('general')),
    )
    scenario = campaign.build(StorefrontConfig.from_dict(config.get_section('storefront')))

    click.echo(f"Running campaign: {campaign.name}")
    try:
        result = asyncio.run(engine.run(scenario))
    except ScenarioRunnerError as e:
        click.echo(f"❌ {e}", err=True)
        raise SystemExit(2)

    summary = result.summary()
    click.echo("\nRun Summary:")
    click.echo(f"  Status: {result.status.value}")
    click.echo(f"  Steps: {summary['total']}")
    click.echo(f"  Passed: {summary['passed']}")
    click.echo(f"  Failed: {summary['failed'] + summary['errored']}")
    click.echo(f"  Skipped: {summary['skipped']}")

    for outcome in result.failed_steps():
        click.echo(f"\n  ✗ {outcome.title} ({outcome.identifier})")
        click.echo(f"    Error: {outcome.error}")

    collector = ReportCollector(output_dir or config.get('reporter.output_dir', 'test-results'))
    for report_format in formats:
        click.echo(f"Report: {collector.generate_report(result.to_dict(), report_format)}")

    raise SystemExit(0 if result.passed else 1)


def main():
    cli()


if __name__ == '__main__':
    main()
