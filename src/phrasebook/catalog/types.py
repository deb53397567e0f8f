"""Type aliases for the catalog domain.

Provides semantic type aliases used throughout the package and by user
code when annotating Translator call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "DialectLabel",
    "MessageText",
    "Source",
    "Tag",
    "TagPath",
]

type Tag = str
"""One level of dialect specificity (e.g., 'zh', 'CN', 'TW'). Case-sensitive."""

type TagPath = tuple[Tag, ...]
"""Ordered tags, most general first (e.g., ('zh', 'CN', 'TW'))."""

type DialectLabel = str
"""Raw dialect spelling as written in markup (e.g., 'zh_CN', 'zh-CN')."""

type MessageText = str
"""Normalized source-language message text used as the lookup key."""

type Source = str
"""Address of a markup document (e.g., 'cp://l10n/app.xml', 'https://...')."""
