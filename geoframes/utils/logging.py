"""Logging utility for geoframes"""

__all__ = ['LOGGER', 'clear_warnings', 'warn_once']

import logging

LOGGER = logging.getLogger('geoframes')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_FORMATTER = logging.Formatter('[%(levelname)s] %(name)s: %(message)s')
_LOG_HANDLER.setFormatter(_LOG_FORMATTER)
LOGGER.addHandler(_LOG_HANDLER)

_WARNINGS = set()


def warn_once(warning: str, *args):
    """
    Logs a warning through the package logger, skipping any warning (after
    argument formatting) that has already been emitted.
    """
    msg = warning % args if args else warning
    if msg not in _WARNINGS:
        LOGGER.warning(msg)
        _WARNINGS.add(msg)


def clear_warnings():
    """Forget previously emitted warnings so that they may be logged again"""
    _WARNINGS.clear()
