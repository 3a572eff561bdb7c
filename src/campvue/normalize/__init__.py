"""Result shaping: RIDB models -> normalized output models.

Pure functions, no I/O. One module per resource:

    text.py        String helpers (casing, names, site numbers, HTML to text)
    activities.py  Activity -> NormalizedActivity
    campsites.py   Campsite -> NormalizedCampsite, attributes, vehicle lengths
    facilities.py  Facility -> NormalizedFacility

Attribute classification itself lives in ``campvue.classify``.
"""
