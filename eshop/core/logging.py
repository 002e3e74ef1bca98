# eshop/core/logging.py
import logging
import sys
import colorlog

LOG_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s [%(name)s]%(reset)s %(message)s"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

# driver / SDK loggers that report every round-trip at INFO
NOISY_LOGGERS = ("pymongo", "httpx", "httpcore", "openai")


def configure_logging(level=logging.INFO, color: bool | None = None):
    """
    Route everything through one colorlog handler on stdout.
    Colors are dropped when stdout is not a terminal (containers, log shipping)
    unless `color` forces them.
    """
    if color is None:
        color = sys.stdout.isatty()

    handler = colorlog.StreamHandler(sys.stdout)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            LOG_FORMAT,
            datefmt="%H:%M:%S",
            log_colors=LEVEL_COLORS,
            no_color=not color,
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in ("uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
