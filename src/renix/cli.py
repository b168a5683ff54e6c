import logging
import os

import click
from rich.logging import RichHandler

from .constants import (
    DEFAULT_BRANCH,
    DEFAULT_FORMATTER,
    DEFAULT_LIMITED_CORES,
    DEFAULT_LOCK_FILE,
    DEFAULT_MAIN_CONFIG,
    DEFAULT_NOTIFY_APP_NAME,
    DEFAULT_PINS_FILE,
    DEFAULT_REMOTE,
    DEFAULT_REPO_ROOT,
    DEFAULT_SCREEN_HOLD_SECONDS,
)
from .core import RebuildOrchestrator
from .errors import RenixError, UsageError
from .models import RebuildSettings, RunOptions
from .services.config_loader import ConfigLoader

# Bare -e/--edit opens the main configuration file.
EDIT_MAIN_CONFIG = "__main_config__"


class ConflictingOptions(click.UsageError):
    exit_code = 1


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _config_value(config, key, default):
    return config.get(key, default)


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=(
        "For safety --boot and --push are mutually exclusive. "
        "If you want to push changes, use --push after a successful reboot."
    ),
)
@click.option(
    "-e",
    "--edit",
    is_flag=False,
    flag_value=EDIT_MAIN_CONFIG,
    default=None,
    metavar="[FILE]",
    help="Edit a configuration file (configuration.nix by default) before rebuilding.",
)
@click.option("-b", "--boot", is_flag=True, help="Rebuild and switch at next boot.")
@click.option("-u", "--update", is_flag=True, help="Update (n)pins before looking for changes.")
@click.option("-p", "--push", is_flag=True, help="Push changes to the remote repository (if successful).")
@click.option("-f", "--force", is_flag=True, help="Force rebuild even if no changes are detected.")
@click.option("-l", "--limited", is_flag=True, help="Resource limited rebuild.")
@click.option(
    "-c",
    "--clean",
    is_flag=True,
    help="Collect garbage after the rebuild and refresh boot entries.",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help="Path to a YAML configuration file. Defaults to .renix.yml if present.",
)
@click.option(
    "--repo-root",
    required=False,
    type=click.Path(),
    help=f"Configuration repository (default: {DEFAULT_REPO_ROOT}).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(edit, boot, update, push, force, limited, clean, config, repo_root, verbose, log_file):
    """Rebuild the NixOS configuration and commit it when the build succeeds."""
    logger = logging.getLogger("renix")

    try:
        options = RunOptions(
            edit=edit is not None,
            edit_target=None if edit in (None, EDIT_MAIN_CONFIG) else edit,
            boot=boot,
            update=update,
            push=push,
            force=force,
            limited=limited,
            clean=clean,
        )
    except UsageError as exc:
        raise ConflictingOptions(str(exc)) from exc

    try:
        config_loader = ConfigLoader()
        config_values = config_loader.load(config or config_loader.default_path())
    except RenixError as exc:
        raise click.ClickException(str(exc)) from exc

    repo_root = _resolve_option(repo_root, config_values, "repo_root", default=DEFAULT_REPO_ROOT)
    settings = RebuildSettings(
        repo_root=os.path.abspath(os.path.expanduser(str(repo_root))),
        main_config=str(_config_value(config_values, "main_config", default=DEFAULT_MAIN_CONFIG)),
        lock_file=str(_config_value(config_values, "lock_file", default=DEFAULT_LOCK_FILE)),
        pins_file=str(_config_value(config_values, "pins_file", default=DEFAULT_PINS_FILE)),
        formatter=str(_config_value(config_values, "formatter", default=DEFAULT_FORMATTER)),
        editor=_config_value(config_values, "editor", default=os.environ.get("EDITOR")),
        use_sudo=bool(_config_value(config_values, "use_sudo", default=True)),
        limited_cores=int(
            _config_value(config_values, "limited_cores", default=DEFAULT_LIMITED_CORES)
        ),
        remote=str(_config_value(config_values, "remote", default=DEFAULT_REMOTE)),
        branch=str(_config_value(config_values, "branch", default=DEFAULT_BRANCH)),
        notify=bool(_config_value(config_values, "notify", default=True)),
        notify_app_name=str(
            _config_value(config_values, "notify_app_name", default=DEFAULT_NOTIFY_APP_NAME)
        ),
        screen_hold_seconds=float(
            _config_value(config_values, "screen_hold_seconds", default=DEFAULT_SCREEN_HOLD_SECONDS)
        ),
    )
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(os.path.expanduser(log_file))
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    orchestrator = RebuildOrchestrator(options=options, settings=settings)
    raise SystemExit(orchestrator.run())


if __name__ == "__main__":
    main()
