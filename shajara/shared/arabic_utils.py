"""
Arabic naming conventions: script detection and kunya/nasab/nisba extraction
"""

import re


ARABIC_LETTER = r'\u0600-\u06FF'


class ArabicNameParser:
    """
    Heuristic decomposition of Arabic names.

    These are regex approximations rather than a grammar: ambiguous names can
    be under- or over-matched.
    """

    ARABIC_SCRIPT = re.compile(r'[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]')

    # أبو محمد / أم كلثوم
    KUNYA_PATTERN = re.compile(rf'(?<![{ARABIC_LETTER}])(?:أبو|أم)\s+[{ARABIC_LETTER}]+')

    # بن خالد بن محمد / بنت علي
    PATRONYMIC_PATTERN = re.compile(
        rf'(?<![{ARABIC_LETTER}])(?:بنت|بن)\s+[{ARABIC_LETTER}]+'
        rf'(?:\s+(?:بنت|بن)\s+[{ARABIC_LETTER}]+)*'
    )

    # الدمشقي / الهاشمي
    NISBA_PATTERN = re.compile(rf'(?<![{ARABIC_LETTER}])ال[{ARABIC_LETTER}]+ي(?![{ARABIC_LETTER}])')

    @classmethod
    def contains_arabic(cls, text: str | None) -> bool:
        """Check whether text contains any Arabic-block character"""
        if not text:
            return False
        return cls.ARABIC_SCRIPT.search(text) is not None

    @classmethod
    def extract_name_parts(cls, name: str | None) -> dict:
        """
        Extract kunya, patronymic chain and nisba from a composite name

        Returns: dict with any of 'kunya', 'patronymic', 'nisba'; a key is
        only present when its pattern matched.
        """
        parts = {}
        if not cls.contains_arabic(name):
            return parts

        kunya = cls.KUNYA_PATTERN.search(name)
        if kunya:
            parts['kunya'] = kunya.group(0)

        patronymic = cls.PATRONYMIC_PATTERN.search(name)
        if patronymic:
            parts['patronymic'] = patronymic.group(0)

        nisba = cls.NISBA_PATTERN.search(name)
        if nisba:
            parts['nisba'] = nisba.group(0)

        return parts
