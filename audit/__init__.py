"""
Audit Logging and Enrichment

Immutable audit log entries whose foreign-key ids are resolved to readable
labels on the way out.
"""
