"""
Shared infrastructure for the signature pad: layered configuration and the
SQLite event log.
"""
