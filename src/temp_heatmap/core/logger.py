"""Rich-based logging for the heat map pipeline.

The pipeline logs through a single named logger. Console output goes through
rich's ``RichHandler`` so that log lines share styling (and, in the CLI, the
same ``Console``) with the progress spinners and summary panels. A plain file
handler that flushes on every record can be attached for runs that should
leave a log next to their output.

Functions
---------
get_logger
    Return the shared heat map logger, creating it on first use.
setup_console_logging
    Attach (or replace) the rich console handler.
setup_file_logging
    Attach (or replace) a flushing file handler inside an output directory.
get_rich_handler
    Build a ``RichHandler`` with the pipeline's styling.
get_file_handler
    Build a file handler that flushes after each record.

Attributes
----------
logger : logging.Logger
    Shared logger instance used across the package.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "heatmap_logger"
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

_logger: Optional[logging.Logger] = None


class FlushFileHandler(logging.FileHandler):
    """File handler that flushes after every record."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


def get_rich_handler(
    console: Optional[Console] = None,
    level: int = logging.INFO,
    show_path: bool = False,
) -> RichHandler:
    """Build a rich console handler.

    Parameters
    ----------
    console : Console, optional
        Console to write to. Defaults to a new stderr console.
    level : int, default=logging.INFO
        Minimum level handled.
    show_path : bool, default=False
        Whether to print the emitting module path next to each record.

    Returns
    -------
    RichHandler
        The configured handler.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=show_path,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=True,
    )
    handler.setLevel(level)
    return handler


def get_file_handler(
    log_path: Path | str,
    level: int = logging.INFO,
    mode: str = "w",
) -> FlushFileHandler:
    """Build a file handler that writes plain (markup-free) lines.

    Parameters
    ----------
    log_path : Path | str
        Destination log file.
    level : int, default=logging.INFO
        Minimum level handled.
    mode : str, default="w"
        ``"w"`` truncates an existing file, ``"a"`` appends to it.

    Returns
    -------
    FlushFileHandler
        The configured handler.
    """
    handler = FlushFileHandler(str(log_path), mode=mode, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    return handler


def get_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Return the shared heat map logger.

    The first call creates the logger, stops propagation to the root logger
    and attaches a rich console handler. Later calls return the same object
    and ignore their arguments.
    """
    global _logger  # noqa: PLW0603

    if _logger is not None:
        return _logger

    _logger = logging.getLogger(name)
    _logger.setLevel(level)
    _logger.propagate = False

    if not _logger.hasHandlers():
        setup_console_logging(_logger, console=console, level=level)

    return _logger


def setup_console_logging(
    logger_instance: Optional[logging.Logger] = None,
    console: Optional[Console] = None,
    level: int = logging.INFO,
    show_path: bool = False,
) -> None:
    """Attach a rich console handler, replacing any previous one.

    Parameters
    ----------
    logger_instance : logging.Logger, optional
        Logger to configure. Defaults to the shared logger.
    console : Console, optional
        Console for the handler, e.g. the CLI's console.
    level : int, default=logging.INFO
        Handler level.
    show_path : bool, default=False
        Whether to show module paths in console records.
    """
    if logger_instance is None:
        logger_instance = get_logger()

    logger_instance.handlers = [
        h for h in logger_instance.handlers if not isinstance(h, RichHandler)
    ]
    logger_instance.addHandler(
        get_rich_handler(console=console, level=level, show_path=show_path)
    )


def setup_file_logging(
    run_dir: Path | str,
    logger_instance: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    filename: str = "heatmap.log",
) -> Path:
    """Attach a flushing file handler inside ``run_dir``.

    The directory is created when missing. Any file handler already attached
    to the logger is dropped first.

    Returns
    -------
    Path
        Path of the log file.
    """
    if logger_instance is None:
        logger_instance = get_logger()

    run_dir = Path(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    log_path = run_dir / filename

    logger_instance.handlers = [
        h for h in logger_instance.handlers if not isinstance(h, logging.FileHandler)
    ]
    logger_instance.addHandler(get_file_handler(log_path, level=level))

    return log_path


logger = get_logger()
