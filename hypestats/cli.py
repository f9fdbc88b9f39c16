"""
Expected Python version: 3.12+

USAGE: hypestats --help
"""

import json
import logging
from typing import Final

import click
import uvicorn

from hypestats.api.webserver import create_app
from hypestats.config.app_settings import get_app_settings
from hypestats.stats.hype_stats_handler import HypeStatsQueryHandler
from hypestats.stats.stats_table import HypeStatsSummaryTable
from hypestats.utils.exceptions import HypeStatsFetchException
from hypestats.utils.log_utils import CONSOLE, DATE_FORMAT, DEFAULT_VERBOSITY, FORMAT, create_rich_log_handler
from hypestats.version import get_project_version

logging.basicConfig(level="NOTSET", format=FORMAT, datefmt=DATE_FORMAT, handlers=[create_rich_log_handler()])
_LOGGER = logging.getLogger()

_APP_VERSION = get_project_version()
_OPTION_ENVVAR_PREFIX: Final[str] = "HYPESTATS"
_GROUP_PARAMS_KEY: Final[str] = "group_params"


# pylint: disable=unused-argument,no-value-for-parameter
@click.group(
    context_settings={"auto_envvar_prefix": _OPTION_ENVVAR_PREFIX},
    help="hypestats: Serves today's hype stats records from MongoDB.",
)
@click.version_option(version=_APP_VERSION, package_name="hypestats", prog_name="hypestats")
@click.option(
    "-v",
    "--verbosity",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=DEFAULT_VERBOSITY,
    show_default=True,
    help="Sets the logging level.",
)
@click.option(
    "--mongo-url",
    type=click.STRING,
    required=False,
    envvar=None,
    help="MongoDB connection string. Overrides the MONGO_URL environment variable.",
)
@click.option(
    "--day-timezone",
    type=click.STRING,
    required=False,
    envvar=None,
    help="IANA time zone defining the current day. Overrides HYPESTATS_DAY_TIMEZONE.",
)
@click.pass_context
def cli(ctx, verbosity: str | None = DEFAULT_VERBOSITY, mongo_url: str | None = None, day_timezone: str | None = None):
    verbosity = verbosity or DEFAULT_VERBOSITY
    _LOGGER.setLevel(verbosity.upper())
    ctx.obj = {}
    possible_overrides = {"mongo_url": mongo_url, "day_timezone": day_timezone}
    ctx.obj[_GROUP_PARAMS_KEY] = {k: v for k, v in possible_overrides.items() if v is not None}


@cli.command(
    help="Run the hypestats API server. For multiple workers, run `uvicorn hypestats.api.main:fastapi_app` directly.",
    short_help="Run the hypestats API server.",
)
@click.option("--host", type=click.STRING, required=False, envvar=None, help="Overrides HYPESTATS_HOST.")
@click.option("--port", type=click.INT, required=False, envvar=None, help="Overrides HYPESTATS_PORT.")
@click.pass_context
def serve(ctx, host: str | None = None, port: int | None = None) -> None:
    app_settings = get_app_settings(cli_overrides={**ctx.obj[_GROUP_PARAMS_KEY], "host": host, "port": port})
    _LOGGER.setLevel(app_settings.log_level)
    uvicorn.run(
        create_app(app_settings=app_settings),
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
    )


@cli.command(
    help="Run the same query as the GET /api/hype_stats endpoint and print today's records.",
    short_help="Print today's hype stats records.",
)
@click.option("--json", "as_json", envvar=None, is_flag=True, default=False, help="Print raw JSON instead of a table.")
@click.pass_context
def today(ctx, as_json: bool = False) -> None:
    app_settings = get_app_settings(cli_overrides=ctx.obj[_GROUP_PARAMS_KEY])
    handler = HypeStatsQueryHandler(app_settings=app_settings)
    try:
        records = handler.fetch_todays_stats_json()
    except HypeStatsFetchException:
        _LOGGER.error("Failed to fetch hype stats.", exc_info=True)
        ctx.exit(1)
    if as_json:
        click.echo(json.dumps(records, indent=2))
        return
    day_label = f"{handler.start_of_day().date().isoformat()} ({app_settings.day_timezone})"
    HypeStatsSummaryTable(records=records, day_label=day_label).print_table(console=CONSOLE)


@cli.command(
    help="Output the effective hypestats settings, including defaults and CLI overrides. The connection string is masked.",
    short_help="Output the current state of your app config for inspection.",
)
@click.pass_context
def conf(ctx) -> None:
    get_app_settings(cli_overrides=ctx.obj[_GROUP_PARAMS_KEY]).pretty_print_config()


if __name__ == "__main__":  # pragma: no cover
    cli(prog_name="hypestats")
