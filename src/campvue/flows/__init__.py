"""
Prefect flows.

Flows:
- vehicle_lengths: Page a campground's campsites from RIDB and report the
  longest permitted vehicle per site and overall

Usage (local):
    python -m campvue.flows.vehicle_lengths FACILITY_ID

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'vehicle-lengths/default'
"""
