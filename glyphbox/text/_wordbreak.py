"""
Word-break classification. Decides whether a line may be broken between two
characters. The rules are data: four sets of characters and a regular
expression for letters and digits. They differ per locale, so they can be
replaced on the layout context.
"""

import re


# Letters and digits of the alphabetic scripts (Latin, Greek, Cyrillic).
# Han and Kana are not included, so that CJK text can break
# between any two characters.
letter_or_digit = r"[0-9A-Za-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u024F\u0370-\u03FF\u0400-\u04FF]"


class WordBreakRules:
    """The data that drives the word-break classifier.

    Parameters:
        break_after (set): codepoints after which a break is always allowed.
        break_before (set): codepoints before which a break is always allowed.
        no_break_after (set): codepoints after which a break is not allowed.
        no_break_before (set): codepoints before which a break is not allowed.
        letter_or_digit (str, re.Pattern): matches the characters that form words.
    """

    def __init__(
        self,
        break_after=(),
        break_before=(),
        no_break_after=(),
        no_break_before=(),
        letter_or_digit=letter_or_digit,
    ):
        self.break_after = frozenset(break_after)
        self.break_before = frozenset(break_before)
        self.no_break_after = frozenset(no_break_after)
        self.no_break_before = frozenset(no_break_before)
        if isinstance(letter_or_digit, str):
            letter_or_digit = re.compile(letter_or_digit)
        self.letter_or_digit = letter_or_digit

    @classmethod
    def from_strings(
        cls,
        break_after="",
        break_before="",
        no_break_after="",
        no_break_before="",
        letter_or_digit=letter_or_digit,
    ):
        """Create rules from strings of characters instead of sets of codepoints."""
        return cls(
            {ord(c) for c in break_after},
            {ord(c) for c in break_before},
            {ord(c) for c in no_break_after},
            {ord(c) for c in no_break_before},
            letter_or_digit,
        )

    def is_letter_or_digit(self, codepoint):
        return self.letter_or_digit.fullmatch(chr(codepoint)) is not None


default_word_break_rules = WordBreakRules.from_strings(
    # Spaces (incl. zero-width and ideographic), hyphens, en dash, slash
    break_after=" \t\u200b\u3000-\u2010\u2013/",
    # Em dash
    break_before="\u2014",
    # Opening brackets and quotes
    no_break_after="([{«‘“〈《「『【〔（［｛",
    # Closing brackets and quotes, punctuation, CJK small marks
    no_break_before=(
        ")]}!?,.:;%»’”…"
        "、。〉》」』】〕ー"
        "！），．：；？］｝"
    ),
)


def is_word_break(current, previous, rules=None):
    """Return whether a line may be broken between previous and current.

    The arguments are codepoints (or single-char strings).
    """
    if rules is None:
        rules = default_word_break_rules
    if isinstance(current, str):
        current = ord(current)
    if isinstance(previous, str):
        previous = ord(previous)

    if previous in rules.break_after or current in rules.break_before:
        return True
    if previous in rules.no_break_after or current in rules.no_break_before:
        return False
    if rules.is_letter_or_digit(previous) and rules.is_letter_or_digit(current):
        return False
    return True
