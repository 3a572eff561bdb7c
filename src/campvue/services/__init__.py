"""
Shared service utilities.

- http.py - ``requests`` session used by every RIDB call (no retries, default timeout)
"""
