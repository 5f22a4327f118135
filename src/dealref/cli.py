"""Root CLI group for dealref with global flags and command registration."""

from __future__ import annotations

import click

from dealref import __version__
from dealref.commands import register_commands
from dealref.commands._context import AppContext
from dealref.config.settings import DealrefSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dealref")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and extra detail.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """dealref — credit referred deals to their initial referrer, by month."""
    settings = DealrefSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)


def run(file_path: str, *cli_args: str) -> int:
    """Print the monthly referral breakdown for *file_path*.

    Equivalent to ``dealref [cli_args] report file_path``. Returns the
    process exit code: 0 on success, non-zero after writing a diagnostic
    to stderr.
    """
    try:
        cli.main(args=[*cli_args, "report", file_path], prog_name="dealref", standalone_mode=False)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return 0
