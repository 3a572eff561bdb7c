"""
Attribute classification.

Turns a free-form RIDB ``(AttributeName, AttributeValue)`` pair into a
``ClassifiedAttribute``: canonical key, display label, scope, amenity flag and
a typed value. Classification is a pure, total function: unknown attributes
degrade to ``scope=unknown`` with a string value instead of failing.

Value typing is tried in order, first success wins:

1. boolean, if the name is a known flag attribute;
2. number, if the name is a known numeric attribute;
3. the raw string.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from campvue.datasources.ridb.models import Attribute
from campvue.normalize.text import title_case
from campvue.reference import attributes as vocab
from campvue.schemas import (
    BooleanAttribute,
    ClassifiedAttribute,
    NumberAttribute,
    Scope,
    StringAttribute,
)

_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_name(name: str) -> str:
    """``"  Max_Num  of People"`` -> ``"max num of people"``"""
    return _WHITESPACE.sub(" ", name.strip().lower().replace("_", " ")).strip()


def canonical_key(normalized: str) -> str:
    """``"capacity/size rating"`` -> ``"capacity_size_rating"``"""
    return _NON_ALNUM.sub("_", normalized).strip("_")


def parse_number(raw: str) -> int | float | None:
    """Parse a trimmed numeric string; ``None`` for blanks and non-finite values."""
    text = raw.strip()
    if not text:
        return None
    try:
        num = float(text)
    except ValueError:
        return None
    if not math.isfinite(num):
        return None
    if "." in text or "e" in text.lower():
        return num
    return int(text)


@dataclass(frozen=True)
class ClassificationTables:
    """The vocabularies a classifier consults. All names are normalized."""

    campground_scope: frozenset[str] = vocab.CAMPGROUND_SCOPE
    campsite_scope: frozenset[str] = vocab.CAMPSITE_SCOPE
    amenities: frozenset[str] = vocab.AMENITY_NAMES
    boolean_attributes: frozenset[str] = vocab.BOOLEAN_ATTRIBUTES
    numeric_attributes: frozenset[str] = vocab.NUMERIC_ATTRIBUTES
    true_values: frozenset[str] = vocab.TRUE_VALUES
    false_values: frozenset[str] = vocab.FALSE_VALUES


class AttributeClassifier:
    """Classifies raw attributes against a fixed set of tables."""

    def __init__(self, tables: ClassificationTables | None = None) -> None:
        self.tables = tables or ClassificationTables()

    def scope(self, normalized: str) -> Scope:
        # Campground wins if a name ever lands in both sets.
        if normalized in self.tables.campground_scope:
            return Scope.CAMPGROUND
        if normalized in self.tables.campsite_scope:
            return Scope.CAMPSITE
        return Scope.UNKNOWN

    def is_amenity(self, normalized: str) -> bool:
        return normalized in self.tables.amenities

    def parse_boolean(self, normalized: str, raw_value: str) -> bool | None:
        if normalized not in self.tables.boolean_attributes:
            return None
        value = raw_value.strip().lower()
        if value in self.tables.true_values:
            return True
        if value in self.tables.false_values:
            return False
        # Flag attributes sometimes repeat their own name as the value
        # ("Showers" = "Showers").
        if value == normalized:
            return True
        return None

    def parse_numeric(self, normalized: str, raw_value: str) -> int | float | None:
        if normalized not in self.tables.numeric_attributes:
            return None
        return parse_number(raw_value)

    def classify(self, name: str, value: str) -> ClassifiedAttribute:
        """Classify one ``(name, value)`` pair. Never raises."""
        normalized = normalize_name(name)
        common = {
            "key": canonical_key(normalized),
            "label": title_case(name.strip()),
            "scope": self.scope(normalized),
            "is_amenity": self.is_amenity(normalized),
        }

        flag = self.parse_boolean(normalized, value)
        if flag is not None:
            return BooleanAttribute(value=flag, **common)

        number = self.parse_numeric(normalized, value)
        if number is not None:
            return NumberAttribute(value=number, **common)

        return StringAttribute(value=value, **common)


default_classifier = AttributeClassifier()


def classify(attribute: Attribute) -> ClassifiedAttribute:
    """Classify a raw RIDB attribute with the built-in tables."""
    return default_classifier.classify(attribute.name, attribute.value)
