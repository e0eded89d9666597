"""
Abstract interfaces for the Workspace Assistant.

These interfaces define the contracts that concrete implementations
must adhere to, following the Dependency Inversion Principle.

This package contains:
- Provider interfaces for external service adapters
- Repository interfaces for conversation persistence
- Service interfaces for the orchestration layer
- Plugin interfaces for tools
"""
