"""
Brand handling for interview topics and generated questions.

Early interview turns must not steer the respondent towards brands, so:

- sanitize_topic() strips known brand names and any trailing
  "ยี่ห้อ ... / แบรนด์ ... / brand ..." clause from the topic before it is
  put into a prompt or a canned question;
- contains_brand() is the predicate used to reject AI-generated questions
  during turns 1-3.

Both are keyword heuristics: missed paraphrases are acceptable, since the
prompts also tell the model not to mention brands. BrandFilter can be
constructed with other lists, and the question generator accepts any
``Callable[[str], bool]`` in place of contains_brand.
"""

import re
from typing import Iterable, List, Optional, Pattern, Sequence

BRAND_NAMES = [
    "liponf",
    "lipinf",
    "sunlight",
    "clear",
    "pantene",
    "l'oréal",
    "loreal",
    "dove",
    "sunsilk",
    "head&shoulders",
    "head and shoulders",
    "gillette",
    "colgate",
    "clinic",
    "lacoste",
    "adidas",
    "nike",
    "unilever",
    "procter",
    "gamble",
]

# Words that point at brands / products without naming one.
BRAND_MARKERS = ["ยี่ห้อ", "แบรนด์", "brand", "product", "ผลิตภัณฑ์"]

BRAND_PATTERNS = [
    re.compile(r"ยี่ห้อ\s*(\w+)", re.IGNORECASE),
    re.compile(r"แบรนด์\s*(\w+)", re.IGNORECASE),
    re.compile(r"ใช้\s*(liponf|sunlight|clear|pantene|dove)", re.IGNORECASE),
    re.compile(r"(liponf|sunlight|clear|pantene|dove)\s*(ของ|ที่|คือ)", re.IGNORECASE),
]

_TRAILING_BRAND_CLAUSE = re.compile(r"\s*(ยี่ห้อ|แบรนด์|brand).*$", re.IGNORECASE | re.DOTALL)


def _brand_name_pattern(names: Iterable[str]) -> Pattern[str]:
    alternatives = []
    for name in names:
        # "head&shoulders" and "head and shoulders" share one spacing-tolerant form.
        if name.startswith("head") and name.endswith("shoulders"):
            alternatives.append(r"head\s*(?:&|and)?\s*shoulders")
        else:
            alternatives.append(re.escape(name))
    # Longest first so "l'oréal" wins over shorter overlaps.
    alternatives = sorted(set(alternatives), key=len, reverse=True)
    return re.compile(r"\s*(?:" + "|".join(alternatives) + ")", re.IGNORECASE)


class BrandFilter:
    """Keyword/regex brand detector and topic cleaner."""

    def __init__(
        self,
        brand_names: Optional[Sequence[str]] = None,
        markers: Optional[Sequence[str]] = None,
        patterns: Optional[Sequence[Pattern[str]]] = None,
    ) -> None:
        self.brand_names: List[str] = [n.lower() for n in (brand_names or BRAND_NAMES)]
        self.markers: List[str] = [m.lower() for m in (markers or BRAND_MARKERS)]
        self.patterns: List[Pattern[str]] = list(patterns or BRAND_PATTERNS)
        self._topic_patterns = [_brand_name_pattern(self.brand_names), _TRAILING_BRAND_CLAUSE]

    def sanitize_topic(self, topic: Optional[str]) -> str:
        """Return the topic without brand names or a trailing brand clause.

        The pattern sequence is re-applied until nothing changes, so the
        result is a fixed point (sanitizing twice equals sanitizing once).
        """
        cleaned = (topic or "").strip()
        while True:
            previous = cleaned
            for pattern in self._topic_patterns:
                cleaned = pattern.sub("", cleaned).strip()
            if cleaned == previous:
                return cleaned

    def contains_brand(self, text: Optional[str]) -> bool:
        if not text:
            return False

        lowered = text.lower()
        for keyword in self.brand_names + self.markers:
            if keyword in lowered:
                return True

        return any(pattern.search(text) for pattern in self.patterns)

    __call__ = contains_brand


default_brand_filter = BrandFilter()


def sanitize_topic(topic: Optional[str]) -> str:
    return default_brand_filter.sanitize_topic(topic)


def contains_brand(text: Optional[str]) -> bool:
    return default_brand_filter.contains_brand(text)
