"""Content validation for Wenshi text."""

import re
import unicodedata

from wenshi.models.document import ValidationOutcome

REASON_EMPTY = "File is empty"
REASON_XML_TAGS = "File contains XML tags (< or >) which are not allowed in .txt files"
REASON_NO_TEXT = "File contains no text characters"
REASON_LOW_CJK = "File must contain at least 50% CJK characters"

MIN_CJK_RATIO = 0.5

# Unicode White_Space characters
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0 "
    "           "
    "    　"
)

CJK_RANGES = (
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3400, 0x4DBF),  # Extension A
    (0x20000, 0x2A6DF),  # Extension B
    (0xF900, 0xFAFF),  # Compatibility Ideographs
)

# {{...}} with no closing brace inside
ANNOTATION_PATTERN = re.compile(r"\{\{[^}]*\}\}")


def trim_space(text: str) -> str:
    """Strip leading and trailing Unicode whitespace."""
    return text.strip(WHITESPACE)


def strip_annotations(text: str) -> str:
    """Remove every {{...}} annotation marker from text."""
    return ANNOTATION_PATTERN.sub("", text)


def is_cjk(char: str) -> bool:
    """Check whether a single character is a CJK ideograph."""
    code = ord(char)
    return any(low <= code <= high for low, high in CJK_RANGES)


def is_space_or_punct(char: str) -> bool:
    """Check whether a character is ignored when counting text characters."""
    return char in WHITESPACE or unicodedata.category(char).startswith("P")


class ContentValidator:
    """Validator deciding whether text qualifies as Wenshi content."""

    def validate(self, text: str) -> ValidationOutcome:
        """
        Validate text against the Wenshi content rules.

        Annotation markers are removed before the markup check and the
        character count, so neither their text nor any < or > inside
        them is considered.

        Args:
            text: Raw text to check.

        Returns:
            Validation outcome with the first failing reason, if any.
        """
        if trim_space(text) == "":
            return ValidationOutcome.fail(REASON_EMPTY)

        clean_text = strip_annotations(text)

        if "<" in clean_text or ">" in clean_text:
            return ValidationOutcome.fail(REASON_XML_TAGS)

        total_chars = 0
        cjk_chars = 0
        for char in clean_text:
            if is_space_or_punct(char):
                continue
            total_chars += 1
            if is_cjk(char):
                cjk_chars += 1

        if total_chars == 0:
            return ValidationOutcome.fail(REASON_NO_TEXT)

        if cjk_chars / total_chars < MIN_CJK_RATIO:
            return ValidationOutcome.fail(REASON_LOW_CJK)

        return ValidationOutcome.ok()


content_validator = ContentValidator()
