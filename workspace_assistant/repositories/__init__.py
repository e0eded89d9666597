"""
Repository implementations for data access.

This package contains the MongoDB repository for conversations, messages,
streams and the observability sinks.
"""
