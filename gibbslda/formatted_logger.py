import logging
import os
import time

LOG_LEVEL_ENV = 'GIBBSLDA_LOG_LEVEL'
LOG_DIR_ENV = 'GIBBSLDA_LOG_DIR'

_levels = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARN,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}


def formatted_logger(label, level=None, format=None, date_format=None, file_path=None):
    """ Return a logger named `label` writing to stderr and, optionally, to a file

    Parameters
    ----------
    label: str
        logger name
    level: str
        one of 'debug', 'info', 'warn', 'error', 'critical'.
        falls back to $GIBBSLDA_LOG_LEVEL, then 'info'
    format: str
        record format passed to logging.Formatter
    date_format: str
        date format passed to logging.Formatter
    file_path: str
        log file path. If None and $GIBBSLDA_LOG_DIR is set, a timestamped
        file is created in that directory. Otherwise no file is written.
    """
    log = logging.getLogger(label)

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, 'info')
    log.setLevel(_levels.get(level.lower(), logging.INFO))

    # repeated calls (e.g. module reload) must not stack handlers
    if log.handlers:
        return log

    if format is None:
        format = '%(asctime)s %(levelname)s:%(name)s:%(message)s'
    if date_format is None:
        date_format = '%Y-%m-%d %H:%M:%S'
    if file_path is None and os.environ.get(LOG_DIR_ENV):
        log_dir = os.environ[LOG_DIR_ENV]
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_path = '%s/%s.%s.log.txt' % (log_dir, label, time.strftime("%Y-%m-%d_%H-%M-%S", time.localtime()))

    formatter = logging.Formatter(format, date_format)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    log.addHandler(stream_handler)
    if file_path is not None:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    return log
