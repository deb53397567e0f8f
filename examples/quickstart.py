"""Quickstart - translating messages from an XML catalog.

Writes a small catalog (with one <include>) to a temporary directory and
looks messages up through the search path, a file:// URL, Babel locales
and a TranslationContext.

Python 3.13+.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from babel import Locale

from phrasebook import TranslationContext, Translator
from phrasebook.loading import SearchPathResourceLoader
from phrasebook.translator import FallbackInfo

MAIN = """\
<?xml version="1.0" encoding="UTF-8"?>
<translator>
  <message>
    <from>Hello, Sauntor!</from>
    <to>
      <zh>您好，适然！</zh>
      <zh_CN>适然，你好！</zh_CN>
      <de>Hallo, Sauntor!</de>
    </to>
  </message>
  <message>
    <from>
      This sentence is long, so it is \\
      split over two lines.
    </from>
    <to>
      <zh_CN>
        这句话很长，\\
        所以分成了两行。
      </zh_CN>
    </to>
  </message>
  <include>l10n/common.xml</include>
</translator>
"""

COMMON = """\
<translator>
  <message>
    <from>Goodbye!</from>
    <to>
      <zh-TW>再見！</zh-TW>
      <de_AT>Servus!</de_AT>
    </to>
  </message>
</translator>
"""


def print_fallback(info: FallbackInfo) -> None:
    print(
        f"  (fallback: {info.message!r} requested {info.requested_locale}, "
        f"resolved {info.resolved_locale})"
    )


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "l10n").mkdir()
        (root / "l10n" / "translator.xml").write_text(MAIN, encoding="utf-8")
        (root / "l10n" / "common.xml").write_text(COMMON, encoding="utf-8")

        print("=" * 50)
        print("Example 1: Dialect fallback with tr()")
        print("=" * 50)
        translator = Translator(
            "cp://l10n/translator.xml",
            SearchPathResourceLoader(roots=(root,)),
            on_fallback=print_fallback,
        )
        for tags in (["zh", "CN"], ["zh", "CN", "HK"], ["zh", "TW"], ["fr"]):
            print(f"  {'_'.join(tags):10} -> {translator.tr('Hello, Sauntor!', tags)!r}")

        print("\n" + "=" * 50)
        print("Example 2: Continuation lines")
        print("=" * 50)
        long = "This sentence is long, so it is split over two lines."
        print(f"  {translator.tr(long, ['zh', 'CN'])}")

        print("\n" + "=" * 50)
        print("Example 3: Babel locales and translate()")
        print("=" * 50)
        print(f"  {translator.tr_locale('Goodbye!', Locale('de', 'AT'))}")
        print(f"  {translator.translate('Goodbye!', ['fr', 'zh_TW'])}")
        print(f"  untranslated -> {translator.translate('Goodbye!', ['fr'])!r}")

        print("\n" + "=" * 50)
        print("Example 4: TranslationContext over a file:// URL")
        print("=" * 50)
        by_url = Translator((root / "l10n" / "common.xml").as_uri())
        _ = TranslationContext(by_url, ("zh_TW", "de_AT"))
        print(f"  {_('Goodbye!')}")

        print("\n" + "=" * 50)
        print("Load summary and cache statistics")
        print("=" * 50)
        print(f"  {translator.get_load_summary()!r}")
        print(f"  {translator.get_cache_stats()}")


if __name__ == "__main__":
    main()
