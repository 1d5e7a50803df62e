from __future__ import annotations


# Precomposed Hangul syllables block.
SYLLABLE_FIRST = 0xAC00
SYLLABLE_LAST = 0xD7A3
# 21 medial vowels * 28 final consonants (including "none").
SYLLABLES_PER_INITIAL = 21 * 28

CHOSUNG = [
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
]


def _initial_of(ch: str) -> str:
    code = ord(ch)
    if code < SYLLABLE_FIRST or code > SYLLABLE_LAST:
        return ch
    return CHOSUNG[(code - SYLLABLE_FIRST) // SYLLABLES_PER_INITIAL]


def make_chosung_hint(word: str) -> str:
    """Reduce every Hangul syllable in ``word`` to its leading consonant.

    >>> make_chosung_hint("고양이")
    'ㄱㅇㅇ'
    >>> make_chosung_hint("TV 리모컨")
    'TV ㄹㅁㅋ'
    """
    return "".join(_initial_of(ch) for ch in word)
