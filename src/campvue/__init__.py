"""campvue - campground data from the Recreation Information Database (RIDB).

Architecture::

    datasources/   RIDB client (deadline, error mapping, validation, pagination)
    classify.py    Attribute classification (scope, amenity, typed value)
    reference/     Static vocabulary tables the classifier consults
    normalize/     Pure RIDB model -> output model shaping
    flows/         Prefect orchestration (vehicle-length report)
    services/      Shared utilities (HTTP session)
    cli.py         ``campvue`` command

Data flow: datasources (fetch + validate + paginate) → classify/normalize → JSON

Extension points (see each package's docstring for a step-by-step guide):
  - New data source:   datasources/__init__.py
"""

__version__ = "0.1.0"

from campvue.config import Settings

__all__ = ["Settings", "__version__"]
