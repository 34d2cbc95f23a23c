"""
Logging helpers: set-up used by the command line and debug dumps of
resolution results.
"""

__all__ = [
    "LOG_FORMAT",
    "init_logging",
    "get_extended_logger",
]


import functools
import logging


LOG_FORMAT = '%(levelname)-8s%(name)s:\t%(message)s'


def init_logging(filename_or_stream, level=logging.DEBUG):
    """Sends log records into a file (truncated first) or an open stream."""
    if isinstance(filename_or_stream, str):
        target = dict(filename=filename_or_stream, filemode='w')
    else:
        target = dict(stream=filename_or_stream)

    logging.basicConfig(level=level, format=LOG_FORMAT, **target)


def get_extended_logger(name):
    """Returns a logger with two extra methods:

        logger.traced(func)  -- decorator marking where a pass starts and
                                ends, and whether it failed.
        logger.dump(plan)    -- multi-line listing of a build plan.

    Both only produce DEBUG records.
    """
    logger = logging.getLogger(name)
    logger.traced = functools.partial(_traced, logger)
    logger.dump = functools.partial(_dump_plan, logger)
    return logger


def _traced(logger, func):
    name = func.__name__

    @functools.wraps(func)
    def decorated(*args, **kwargs):
        logger.debug('>>> %s', name)
        try:
            ret = func(*args, **kwargs)
        except Exception as e:
            logger.debug('<<< %s failed: %s', name, e)
            raise
        logger.debug('<<< %s', name)
        return ret

    return decorated


def _dump_plan(logger, plan):
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug('build order (%d): %s', len(plan), ' '.join(plan.order))
    for name in plan.order:
        logger.debug('\t%s', name)
        for label, names in (('public', plan.public_dependencies(name)),
                             ('private', plan.private_dependencies(name)),
                             ('defines', plan.compile_definitions(name))):
            if names:
                logger.debug('\t\t%-8s%s', label + ':', ' '.join(names))
