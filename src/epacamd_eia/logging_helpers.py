"""Configure logging for the epacamd_eia package.

All of the crosswalk's loggers live under the ``catalystcoop`` dagster logger, so that
the same messages show up on the console, in a logfile, and in the dagster UI when the
assets are materialized there.
"""

import logging
from pathlib import Path

import coloredlogs
from dagster import get_dagster_logger

LOG_FORMAT: str = "%(asctime)s [%(levelname)8s] %(name)s:%(lineno)s %(message)s"

DEPENDENCY_LOGLEVELS: dict[str, int] = {
    "pandera": logging.WARNING,
    "dagster": logging.WARNING,
}
"""Dependencies that are chatty at INFO, and the level to quiet them down to."""


def get_logger(name: str) -> logging.Logger:
    """Helper function to append 'catalystcoop' to logger name and return logger."""
    return get_dagster_logger(f"catalystcoop.{name}")


def _replace_file_handler(logger: logging.Logger, logfile: Path) -> None:
    """Send log records to ``logfile``, dropping any file handler added earlier.

    Configuring logging more than once in the same process (e.g. invoking the CLI
    repeatedly from tests) would otherwise write every record to every logfile ever
    requested.
    """
    for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        logger.removeHandler(handler)
        handler.close()
    logfile.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(logfile)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)


def configure_root_logger(
    logfile: str | Path | None = None,
    loglevel: str = "INFO",
    dependency_loglevels: dict[str, int] | None = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure the root catalystcoop logger.

    Args:
        logfile: Path to logfile or None. Missing parent directories are created.
        loglevel: Level of detail at which to log, by default INFO.
        dependency_loglevels: Dictionary mapping dependency name to desired loglevel.
            Defaults to :data:`DEPENDENCY_LOGLEVELS`.
        propagate: Whether to propagate logs to ancestor loggers. Useful for ensuring
            that pytest has access to the crosswalk logs during testing.

    Returns:
        The configured catalystcoop logger.
    """
    if dependency_loglevels is None:
        dependency_loglevels = DEPENDENCY_LOGLEVELS
    for dependency_name, dependency_loglevel in dependency_loglevels.items():
        logging.getLogger(dependency_name).setLevel(dependency_loglevel)

    logger = get_dagster_logger("catalystcoop")
    coloredlogs.install(fmt=LOG_FORMAT, level=loglevel, logger=logger)

    if logfile is not None:
        _replace_file_handler(logger, Path(logfile))

    logger.propagate = propagate
    return logger
