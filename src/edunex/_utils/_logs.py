import logging
import sys

LOGGER_NAME = "edunex"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(should_debug: bool = False) -> None:
    """Attach a single stream handler to the ``edunex`` logger.

    Calling it again only adjusts the level, so it is safe to invoke from both the
    SDK constructor and CLI commands.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)

    if not any(getattr(h, "_edunex", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._edunex = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    # httpx logs every request at INFO; keep it quiet unless debugging
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if should_debug else logging.WARNING
    )
