import logging
import sys

from logfmter import Logfmter

from cookie_mcp.config import Settings


def configure_logging(settings: Settings) -> logging.Logger:
    if settings.logfmt_enabled:
        formatter = Logfmter(
            keys=["at", "when", "name", "msg"],
            mapping={"at": "levelname", "when": "asctime"},
            datefmt="%Y%m%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    logger = logging.getLogger("cookie_mcp")
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # stdout belongs to the stdio transport
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger.handlers = [handler]
    logger.propagate = False
    return logger
