"""
Domain models for the Workspace Assistant.

This package contains the core domain models that represent the
business objects and value types of the assistant orchestration layer.
"""
