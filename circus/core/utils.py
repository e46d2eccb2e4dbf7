import logging
import sys

# elapsed ms since start, level tag, message
LOG_FORMAT = "%(relativeCreated)dms\t%(levelname)s\t%(message)s"
ROOT_LOGGER = "circus"


def configure_logging(cfg) -> logging.Logger:
    """Install the single handler of the ``circus`` logger tree.

    ``log_level = "OFF"`` selects a no-op logger, ``log_file`` a file and the
    default is stderr (stdout belongs to the turn protocol).
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    level = str(cfg.log_level).upper()
    if level == "OFF":
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)
        return logger

    if cfg.log_file:
        handler = logging.FileHandler(cfg.log_file, mode="w", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.INFO))
    return logger


def log_search_info(logger, depth, branching, score, nodes, elapsed, move):
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    score_str = "-" if score is None else str(score)
    logger.debug(
        "info depth %d branching %d score %s nodes %d nps %d time %dms move %s",
        depth, branching, score_str, nodes, nps, int(elapsed * 1000), move,
    )
