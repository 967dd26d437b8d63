"""
Logging setup shared by the server and the client.

Both processes log through the stdlib ``logging`` module with module-level
loggers. This module only wires handlers onto the root logger.
"""
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_dir: str, log_file: str, debug: bool = False, console: bool = True) -> str:
    """
    Send log records to an append-only file under ``log_dir`` and,
    optionally, to standard output.

    Args:
        log_dir: Directory created if missing
        log_file: File name inside ``log_dir``
        debug: Use DEBUG instead of INFO
        console: Also log to stdout (the TUI client disables this)

    Returns:
        Path of the log file

    Raises:
        OSError: If the directory cannot be created or the file opened
    """
    os.makedirs(log_dir, exist_ok=True)
    path = os.path.join(log_dir, log_file)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")

    handlers: list[logging.Handler] = [file_handler]
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(logging.DEBUG if debug else logging.INFO)
    # Keep third-party chatter out of debug output
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return path
