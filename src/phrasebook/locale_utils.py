"""Locale utilities: dialect labels, locale objects and system locale.

Centralizes the conversions between the different spellings of a dialect
so that every lookup ends up with the same TagPath:

    "zh_CN"  /  "zh-CN"  /  Locale("zh", "CN")  ->  ("zh", "CN")

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

    from phrasebook.catalog.types import TagPath

__all__ = [
    "get_system_locale",
    "locale_to_tags",
    "normalize_locale",
    "split_dialect_label",
]

logger = logging.getLogger(__name__)

# Both POSIX (zh_CN) and BCP-47 (zh-CN) separators split a label into tags.
_LABEL_SEPARATOR = re.compile(r"[_-]")


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


def split_dialect_label(label: str) -> TagPath:
    """Split a dialect label into a TagPath.

    Tags keep their left-to-right order (general to specific) and their
    case. Empty fragments from doubled or trailing separators are dropped.

    Args:
        label: Dialect label such as an element name ("zh_CN", "zh-CN-TW")

    Returns:
        Tuple of tags; empty if the label contains no tag at all

    Example:
        >>> split_dialect_label("zh_CN")
        ('zh', 'CN')
        >>> split_dialect_label("zh-CN_TW")
        ('zh', 'CN', 'TW')
        >>> split_dialect_label("en")
        ('en',)
    """
    return tuple(tag for tag in _LABEL_SEPARATOR.split(label) if tag)


def locale_to_tags(locale: Locale | str) -> TagPath:
    """Decompose a locale into [language, region, variant] tags.

    Empty components are dropped and the order is preserved. Babel Locale
    objects contribute language, territory and variant; the script subtag
    has no place in a TagPath and is ignored. Strings are split like
    dialect labels, so "zh_CN_TW" and "zh-CN-TW" both give three tags.

    Args:
        locale: Babel Locale or locale code string

    Returns:
        TagPath for the locale (may be empty for an empty string)

    Example:
        >>> from babel import Locale
        >>> locale_to_tags(Locale("en", "US"))
        ('en', 'US')
        >>> locale_to_tags("zh_CN_TW")
        ('zh', 'CN', 'TW')
    """
    if isinstance(locale, str):
        return split_dialect_label(locale)
    parts = (locale.language, locale.territory, locale.variant)
    return tuple(part for part in parts if part)


# Values that name no real locale.
_PSEUDO_LOCALES = frozenset({"", "C", "POSIX"})

# Environment variables consulted after the OS locale, highest priority first.
_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")


def _strip_codeset(value: str) -> str:
    """'zh_CN.UTF-8@pinyin' -> 'zh_CN'."""
    return normalize_locale(value.split(".", 1)[0].split("@", 1)[0])


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect the locale of the running process.

    The OS locale reported by locale.getlocale() is tried first, then
    LC_ALL, LC_MESSAGES and LANG in that order. Codeset and modifier
    suffixes are removed and "C"/"POSIX" are skipped.

    Args:
        raise_on_failure: Raise instead of falling back to "en_US"

    Returns:
        Locale code such as "zh_CN"

    Raises:
        RuntimeError: If nothing usable is found and raise_on_failure is set
    """
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str | None] = []
    try:
        candidates.append(locale_module.getlocale()[0])
    except ValueError:
        logger.debug("locale.getlocale() could not parse the OS locale")
    candidates.extend(os.environ.get(var) for var in _LOCALE_ENV_VARS)

    for value in candidates:
        if value and value not in _PSEUDO_LOCALES:
            return _strip_codeset(value)

    if raise_on_failure:
        msg = "No system locale found; set LC_ALL, LC_MESSAGES or LANG"
        raise RuntimeError(msg)
    logger.warning("No system locale found, using en_US")
    return "en_US"
