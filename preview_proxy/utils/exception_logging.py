"""
Helpers for turning arbitrary exceptions into log lines and client messages.

Neither helper is allowed to raise: they run inside error handlers where a
second failure would replace the original one.
"""

import logging
from typing import Optional


def _safe_str(obj) -> str:
    """
    Convert an object to string without ever raising.

    Falls back to ``repr`` and finally to the type name when ``__str__`` is
    broken.
    """
    try:
        return str(obj)
    except Exception:
        try:
            return repr(obj)
        except Exception:
            return f"<{type(obj).__name__} (string conversion failed)>"


def _sub_exceptions(exception) -> list:
    try:
        return list(getattr(exception, "exceptions", None) or [])
    except Exception:
        return []


def format_exception_message(
    exception: Optional[BaseException], fallback: str = "Unknown error occurred"
) -> str:
    """
    Build a client facing message for an exception.

    Args:
        exception: The exception to describe
        fallback: Returned when the exception carries no message at all

    Returns:
        The exception message, with sub-exceptions appended for exception
        groups, or ``fallback`` when nothing useful is available
    """
    if exception is None:
        return fallback

    message = _safe_str(exception).strip()
    subs = _sub_exceptions(exception)
    if subs:
        details = "; ".join(
            f"{type(sub).__name__}: {_safe_str(sub)}" for sub in subs
        )
        message = f"{message} (Sub-exceptions: {details})" if message else details

    return message or fallback


def log_exception_with_details(
    logger: logging.Logger,
    prefix: str,
    exception: BaseException,
    level: int = logging.ERROR,
) -> None:
    """Log an exception with its traceback, one line per sub-exception."""
    try:
        subs = _sub_exceptions(exception)
        if subs:
            logger.log(
                level,
                f"{prefix} Exception with {len(subs)} sub-exceptions: {_safe_str(exception)}",
            )
            for i, sub in enumerate(subs):
                logger.log(
                    level,
                    f"{prefix} Sub-exception {i + 1}: {type(sub).__name__}: {_safe_str(sub)}",
                    exc_info=sub,
                )
            return
        logger.log(
            level,
            f"{prefix} Exception: {_safe_str(exception)}",
            exc_info=exception if exception is not None else False,
        )
    except Exception:
        try:
            logger.log(logging.ERROR, f"{prefix} Exception (logging failed)")
        except Exception:
            pass
