# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Defaults for decoding

Problem levels follow the levels of the ``logging`` module:

* ``INFO`` (20) - something in the header is recognized but not translated,
  such as an sform transform;
* ``DEGRADED`` (30) - decoding recovered from a problem, and some field was
  truncated, defaulted or omitted.

``error_level`` is the problem level at which a collected report will be
raised as an error, by the batteryrunners ``log_raise`` method.  The default
of 40 lets every degraded-mode problem through.  Use ``ErrorLevel(DEGRADED)``
for a strict decode that fails on the first recovered problem.

``logger`` is the default logger (python log instance).  Each report is
logged as it is collected.

To set the log level (log message appears for problem of level >= log level),
use e.g. ``logger.level = 40``.

As for most loggers, if ``logger.level == 0`` then a default log level is used -
use ``logger.getEffectiveLevel()`` to see what that default is.
"""
import logging

INFO = logging.INFO
DEGRADED = logging.WARNING

error_level = 40
logger = logging.getLogger('niftinrrd.global')
logger.addHandler(logging.StreamHandler())


class ErrorLevel:
    """Context manager to set the level at which reports become errors"""

    def __init__(self, level):
        self.level = level

    def __enter__(self):
        global error_level
        self._original_level = error_level
        error_level = self.level

    def __exit__(self, exc, value, tb):
        global error_level
        error_level = self._original_level
        return False


class LoggingOutputSuppressor:
    """Context manager to stop the global logger from printing reports"""

    def __enter__(self):
        self.orig_handlers = list(logger.handlers)
        for handler in self.orig_handlers:
            logger.removeHandler(handler)

    def __exit__(self, exc, value, tb):
        for handler in self.orig_handlers:
            logger.addHandler(handler)
