"""Logging setup for the Summarist CLI.

Call ``setup_logging`` once from ``cli.main()`` to configure the ``"summarist"``
package logger.  All other modules obtain a child logger via
``logging.getLogger(__name__)`` and let records propagate here.

Console records go to stderr so they never interleave with the interactive
prompts printed on stdout.
"""

import logging
import sys
from pathlib import Path

_FMT = "%(asctime)s  %(levelname)-7s [%(threadName)s] %(message)s"
_DATE = "%H:%M:%S"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    console: bool = True,
) -> None:
    """Configure the ``summarist`` logger for a CLI session.

    Args:
        verbose:  If True, set level to DEBUG.  Default level is INFO.
        log_file: If provided, attach a ``FileHandler`` that writes to this
                  path.  Parent directories are created automatically.
        console:  If False, skip the stderr handler (records then only reach
                  the log file).

    Calling this function a second time (e.g., in tests) is safe: existing
    handlers are cleared before new ones are added.
    """
    logger = logging.getLogger("summarist")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(_FMT, datefmt=_DATE)

    if console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(fmt)
        # Keep the interactive console quiet unless something went wrong.
        stream.setLevel(logging.DEBUG if verbose else logging.WARNING)
        logger.addHandler(stream)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)
