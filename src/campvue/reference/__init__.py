"""Static RIDB vocabularies.

Reference data that doesn't change with API calls: attribute scope,
amenity and value-type tables.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from campvue.reference.attributes import AMENITY_NAMES as AMENITY_NAMES
from campvue.reference.attributes import BOOLEAN_ATTRIBUTES as BOOLEAN_ATTRIBUTES
from campvue.reference.attributes import CAMPGROUND_SCOPE as CAMPGROUND_SCOPE
from campvue.reference.attributes import CAMPSITE_SCOPE as CAMPSITE_SCOPE
from campvue.reference.attributes import NUMERIC_ATTRIBUTES as NUMERIC_ATTRIBUTES
