import logging

from rich.logging import RichHandler

from utils import config


class CenteredFormatter(logging.Formatter):
    """Pads logger names to the widest name seen so far."""

    name_width = 12

    def format(self, record):
        CenteredFormatter.name_width = max(
            CenteredFormatter.name_width, len(record.name)
        )
        record.name = record.name.center(CenteredFormatter.name_width)
        return super().format(record)


def get_logger(name=None) -> logging.Logger:
    """
    Return a logger that writes through RichHandler.

    DEBUG in the environment lowers the level to DEBUG.
    Handlers are only attached the first time a name is requested.
    """
    logger = logging.getLogger(name or "shopease")
    level = logging.DEBUG if config.DEBUG else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(CenteredFormatter("[%(name)s]  %(message)s"))
        handler.setLevel(level)
        logger.addHandler(handler)
        logger.propagate = False
        logger.debug(f"Logger for '{logger.name}' ready.")

    return logger
