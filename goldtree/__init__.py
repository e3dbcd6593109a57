import logging
import os

from .consts import LOG_LEVEL_ENV_VAR

__version__ = "0.1.0"


#
# Basic logger configuration
#


def get_logger(name=None):
    """Return a logger to use"""
    return logging.getLogger("goldtree" + (".%s" % name if name else ""))


def set_logger_level(lgr, level):
    if isinstance(level, int):
        pass
    elif level.isnumeric():
        level = int(level)
    elif level.isalpha():
        level = getattr(logging, level.upper(), None)
        if not isinstance(level, int):
            lgr.warning("Unknown log level name, keeping %s", lgr.level)
            return
    else:
        lgr.warning("Do not know how to treat loglevel %s" % level)
        return
    lgr.setLevel(level)


lgr = get_logger()
set_logger_level(lgr, os.environ.get(LOG_LEVEL_ENV_VAR, logging.INFO))
