"""Shell argument escaping for POSIX shells and cmd.exe.

The quoting never drops bytes: non-ASCII text survives unchanged, and on
Windows ``%`` survives through a placeholder swap around the quoting step.
When a locale is configured, quoting runs with ``LC_CTYPE`` temporarily
switched to it. ``LC_CTYPE`` is process-wide, so every switch goes through
:func:`ctype_locale`, which serialises callers on a module-level lock.
"""

from __future__ import annotations

import codecs
import locale
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from magick_exec.errors import ConfigurationError

PERCENT_SIGN_PLACEHOLDER = "8642097531MAGICKEXECPERCENTSIGNPLACEHOLDER1357902468"

_LOCALE_LOCK = threading.Lock()


@dataclass(frozen=True)
class EscapeContext:
    """Settings that influence how a token is quoted.

    Parameters
    ----------
    locale : str | None
        ``LC_CTYPE`` locale active while quoting, e.g. ``"en_US.UTF-8"``.
        ``None`` quotes under whatever locale the process already has.
    windows : bool
        Quote for cmd.exe instead of a POSIX shell.
    """

    locale: str | None = None
    windows: bool = os.name == "nt"


@contextmanager
def ctype_locale(name: str) -> Iterator[str]:
    """Switch ``LC_CTYPE`` to ``name`` and restore the previous value on exit.

    Yields the codeset of the switched locale.

    Raises
    ------
    ConfigurationError
        If the locale is not installed on this host.
    """
    with _LOCALE_LOCK:
        previous = locale.setlocale(locale.LC_CTYPE)
        if previous == name:
            yield _active_codeset()
            return
        try:
            locale.setlocale(locale.LC_CTYPE, name)
        except locale.Error as exc:
            raise ConfigurationError(
                f"Locale '{name}' is not available on this system."
            ) from exc
        try:
            yield _active_codeset()
        finally:
            locale.setlocale(locale.LC_CTYPE, previous)


def _active_codeset() -> str | None:
    if hasattr(locale, "nl_langinfo"):
        return locale.nl_langinfo(locale.CODESET) or None
    return locale.getlocale(locale.LC_CTYPE)[1]


def _check_representable(arg: str, codeset: str | None, locale_name: str) -> None:
    if not codeset:
        return
    try:
        codecs.lookup(codeset)
    except LookupError:
        return
    try:
        arg.encode(codeset)
    except UnicodeEncodeError as exc:
        raise ConfigurationError(
            f"Argument {arg!r} cannot be represented in locale '{locale_name}' "
            f"({codeset})."
        ) from exc


def quote_posix(arg: str) -> str:
    """Single-quote ``arg``; embedded quotes become ``'\\''``."""
    return "'" + arg.replace("'", "'\\''") + "'"


def quote_windows(arg: str) -> str:
    """Double-quote ``arg`` for cmd.exe and the MSVC runtime argv parser.

    ``"``, ``%`` and ``!`` are replaced by spaces: cmd.exe toggles its quote
    state on every ``"`` regardless of backslashes, and ``%``/``!`` are
    expansion sigils. Trailing backslashes are doubled so the closing quote
    is not escaped.
    """
    parts: list[str] = []
    backslashes = 0
    for char in arg:
        if char == "\\":
            backslashes += 1
            continue
        if char in '"%!':
            parts.append("\\" * backslashes + " ")
        else:
            parts.append("\\" * backslashes + char)
        backslashes = 0
    parts.append("\\" * (backslashes * 2))
    return '"' + "".join(parts) + '"'


def escape_shell_arg(arg: str, context: EscapeContext | None = None) -> str:
    """Escape ``arg`` so the target shell passes it through as one argument.

    Parameters
    ----------
    arg : str
        Raw argument text.
    context : EscapeContext | None, default=None
        Quoting platform and locale. Defaults to the current platform with
        no locale switch.

    Returns
    -------
    str
        The quoted token.

    Raises
    ------
    ConfigurationError
        If the configured locale is unavailable or cannot represent ``arg``.
    """
    context = context or EscapeContext()
    if context.windows:
        arg = arg.replace("%", PERCENT_SIGN_PLACEHOLDER)
    quote = quote_windows if context.windows else quote_posix

    if context.locale:
        with ctype_locale(context.locale) as codeset:
            _check_representable(arg, codeset, context.locale)
            escaped = quote(arg)
    else:
        escaped = quote(arg)

    if context.windows:
        escaped = escaped.replace(PERCENT_SIGN_PLACEHOLDER, "%")
    return escaped
