"""Campsite attribute vocabularies.

RIDB attributes are free-form name/value pairs. These hand-curated sets map
normalized attribute names (lowercase, single-spaced, no underscores) onto
scope, amenity and value-type semantics. They are read-only for the life of
the process.
"""

from __future__ import annotations

# Attributes describing the campground as a whole.
CAMPGROUND_SCOPE: frozenset[str] = frozenset(
    {
        "grills",
        "drinking water",
        "water spigots",
        "water spigot",
        "campfire rings",
        "fire rings",
        "campfires",
        "picnic tables",
        "tables",
        "toilets",
        "flush toilets",
        "vault toilets",
        "showers",
        "pets",
        "pets allowed",
        "campfire allowed",
        "checkin time",
        "checkout time",
    }
)

# Attributes describing a single campsite.
CAMPSITE_SCOPE: frozenset[str] = frozenset(
    {
        "equipment",
        "is equipment mandatory",
        "picnic table",
        "fire ring",
        "shade",
        "site access",
        "bbq",
        "grill",
        "capacity/size rating",
        "driveway entry",
        "driveway grade",
        "driveway surface",
        "fire pit",
        "max num of people",
        "max num of vehicles",
        "max vehicle length",
        "min num of people",
        "min num of vehicles",
        "map x coordinate",
        "map y coordinate",
        "placed on map",
    }
)

# User-facing facility features, independent of scope.
AMENITY_NAMES: frozenset[str] = frozenset(
    {
        "picnic table",
        "picnic tables",
        "grill",
        "grills",
        "fire ring",
        "fire rings",
        "fire pit",
        "fire pits",
        "campfire ring",
        "campfire rings",
        "flush toilets",
        "vault toilets",
        "showers",
        "drinking water",
        "shade",
        "bbq",
    }
)

# Attributes whose value is a yes/no flag.
BOOLEAN_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "is equipment mandatory",
        "grills",
        "drinking water",
        "campfire rings",
        "picnic tables",
        "flush toilets",
        "pets allowed",
        "picnic table",
        "shade",
        "bbq",
        "campfire allowed",
        "fire pit",
        "placed on map",
    }
)

# Attributes whose value is a count, length or coordinate.
NUMERIC_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "max num of people",
        "max num of vehicles",
        "max vehicle length",
        "min num of people",
        "min num of vehicles",
        "map x coordinate",
        "map y coordinate",
    }
)

TRUE_VALUES: frozenset[str] = frozenset({"y", "yes", "true", "1"})
FALSE_VALUES: frozenset[str] = frozenset({"n", "no", "false", "none", "0"})
