import logging
import os

logger = logging.getLogger(__name__)

_DEFAULT_REAL_PRECISION = 9
_DEFAULT_REAL_EPSILON = 1e-14
_DEFAULT_MAX_CALL_DEPTH = 1000
_DEFAULT_LOG_LEVEL = 'WARNING'
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _from_env(var, default, convert):
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        logger.warning("ignoring %s=%r, using %r", var, raw, default)
        return default


def int_from_env(var, default):
    return _from_env(var, default, int)


def float_from_env(var, default):
    return _from_env(var, default, float)


def get_real_precision():
    # number of fractional digits printed for reals
    return int_from_env('VLAD_REAL_PRECISION', _DEFAULT_REAL_PRECISION)


def get_real_epsilon():
    return float_from_env('VLAD_REAL_EPSILON', _DEFAULT_REAL_EPSILON)


def get_max_call_depth():
    return int_from_env('VLAD_MAX_CALL_DEPTH', _DEFAULT_MAX_CALL_DEPTH)


def get_log_level():
    level = os.environ.get('VLAD_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper() or _DEFAULT_LOG_LEVEL
    if level not in _LOG_LEVELS:
        logger.warning("ignoring VLAD_LOG_LEVEL=%r, using %r", level, _DEFAULT_LOG_LEVEL)
        return _DEFAULT_LOG_LEVEL
    return level
