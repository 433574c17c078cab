# dor_fetcher/textual_manipulation.py

from typing import Any, Optional

# Endings that take "es" in the plural (box -> boxes, match -> matches).
SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")
VOWELS = "aeiou"

def pluralize(word: str) -> str:
    """
    English plural of an object type name, covering the vocabulary the index
    uses: 'item' -> 'items', 'adminpolicy' -> 'adminpolicies'.
    """
    if not word:
        return word
    if word.endswith("y") and len(word) > 1 and word[-2] not in VOWELS:
        return word[:-1] + "ies"
    if word.endswith(SIBILANT_ENDINGS):
        return word + "es"
    return word + "s"

def is_blank(value: Any) -> bool:
    """True for None, empty containers and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False

def first_value(value: Any) -> Optional[Any]:
    """
    Solr returns multi-valued fields as lists and single-valued ones as
    scalars; this gives the first value of either, or None.
    """
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value
