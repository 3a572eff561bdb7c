"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request/validation plumbing
    ├── models.py         # Models for API responses
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Adding an RIDB endpoint
-----------------------
1. Add a record model and ``RIDBPage[...]`` alias in ``ridb/models.py``.

2. Write fetch functions on top of the client::

       from campvue.datasources.ridb import client

       def fetch_all_things(parent_id) -> list[Thing]:
           return client.get_all(client.resource("parents", parent_id, "things"),
                                 schema=ThingPage)

3. Re-export public API in ``ridb/__init__.py`` with ``__all__``.

4. Add shaping in ``normalize/`` and a CLI sub-command if it is user-facing.

5. Add tests in ``tests/test_ridb_{name}.py``.
"""
