import logging
import os
import warnings
import bngexport

LOG_LEVEL_ENV_VAR = 'BNGEXPORT_LOG'
BASE_LOGGER_NAME = 'bngexport'
NAMED_LOG_LEVELS = {'NOTSET': logging.NOTSET,
                    'DEBUG': logging.DEBUG,
                    'INFO': logging.INFO,
                    'WARNING': logging.WARNING,
                    'ERROR': logging.ERROR,
                    'CRITICAL': logging.CRITICAL}
LOG_FORMAT = '%(asctime)s.%(msecs).3d - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def level_from_env(default=logging.WARNING):
    """
    Log level set in the BNGEXPORT_LOG environment variable, or the default

    The variable may hold an integer level or a level name such as ``DEBUG``.
    """
    if LOG_LEVEL_ENV_VAR not in os.environ:
        return default
    try:
        return int(os.environ[LOG_LEVEL_ENV_VAR])
    except ValueError:
        # Try parsing as a name
        level_name = os.environ[LOG_LEVEL_ENV_VAR]
        if level_name in NAMED_LOG_LEVELS.keys():
            return NAMED_LOG_LEVELS[level_name]
        raise ValueError('Environment variable {} contains an '
                         'invalid value "{}". If set, its value must '
                         'be one of {} (case-sensitive) or an '
                         'integer log level.'.format(
                             LOG_LEVEL_ENV_VAR, level_name,
                             ", ".join(NAMED_LOG_LEVELS.keys())))


def setup_logger(level=logging.WARNING, console_output=True):
    """
    Set up a new logging.Logger for bngexport logging

    Calling this method will override any existing handlers attached to the
    bngexport logger. Typically, :func:`get_logger` should be used instead,
    which returns the existing logger if it has already been set up, and can
    handle submodule namespaces.

    Parameters
    ----------
    level : int
        Logging level, typically using a constant like logging.INFO or
        logging.DEBUG. Overridden by the BNGEXPORT_LOG environment variable.
    console_output : bool
        Set up a console log handler if True (default)

    Returns
    -------
    A logging.Logger object for bngexport logging. Other modules should use a
    logger specific to their namespace instead by calling :func:`get_logger`.
    """
    log = logging.getLogger(BASE_LOGGER_NAME)
    log.setLevel(level_from_env(level))
    log.handlers = []

    if console_output:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT,
                                                      LOG_DATE_FORMAT))
        log.addHandler(stream_handler)

    log.info('Logging started on bngexport version %s', bngexport.__version__)
    return log


def get_logger(logger_name=BASE_LOGGER_NAME, model=None, log_level=None,
               **kwargs):
    """
    Returns (if extant) or creates a bngexport logger

    If the base logger has already been set up, this method will return it
    or any of its descendant loggers without overriding the settings - i.e.
    any values supplied as kwargs will be ignored.

    Parameters
    ----------
    logger_name : string
        Get a logger for a specific namespace, typically __name__ for code
        outside of classes or self.__module__ inside a class
    model : bngexport.core.Model
        If this logger is related to a specific model instance, pass the
        model object as an argument to have the model's name prepended to
        log entries
    log_level : bool or int
        Override the default or preset log level for the requested logger.
        None or False uses the default or preset value. True evaluates to
        logging.DEBUG. Any integer is used directly.
    **kwargs : kwargs
        Keyword arguments to supply to :func:`setup_logger`. Only used when
        the base logger hasn't been set up yet.

    Returns
    -------
    A logging.Logger object with the requested name

    Examples
    --------

    >>> from bngexport.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug('Test message')
    """
    if BASE_LOGGER_NAME not in logging.Logger.manager.loggerDict.keys():
        setup_logger(**kwargs)
    elif kwargs:
        warnings.warn('bngexport logger already exists, ignoring keyword '
                      'arguments to setup_logger')

    logger = logging.getLogger(logger_name)

    if log_level is not None and log_level is not False:
        if isinstance(log_level, bool):
            log_level = logging.DEBUG
        elif not isinstance(log_level, int):
            raise ValueError('log_level must be a boolean, integer or None')

        if logger.getEffectiveLevel() != log_level:
            logger.debug('Changing log_level from %d to %d' % (
                logger.getEffectiveLevel(), log_level))
            logger.setLevel(log_level)

    if model is None:
        return logger
    else:
        return ModelLoggerAdapter(logger, {'model': model})


class ModelLoggerAdapter(logging.LoggerAdapter):
    """ A logging adapter to prepend a model's name to log entries """
    def process(self, msg, kwargs):
        return '[%s] %s' % (self.extra['model'].name, msg), kwargs
