"""Locale-aware text ordering backed by QCollator."""

import functools
from typing import Any

from PySide6.QtCore import QCollator, QLocale

from book_backlog.services.settings_manager import DEFAULT_COLLATION_LOCALE


class CollationKeyFactory:
    """Builds sort keys that order text by linguistic convention.

    Raw codepoint comparison puts "Zebra" before "apple" and "é" after "z";
    the collator orders them the way a reader expects for the locale.
    """

    def __init__(self, locale_name: str = DEFAULT_COLLATION_LOCALE) -> None:
        self.locale = QLocale(locale_name)
        self._collator = QCollator(self.locale)
        self._key = functools.cmp_to_key(self._collator.compare)

    def compare(self, left: str, right: str) -> int:
        return self._collator.compare(left, right)

    def sort_key(self, text: str) -> Any:
        return self._key(text)

    def __call__(self, text: str) -> Any:
        return self.sort_key(text)
