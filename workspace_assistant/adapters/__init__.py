"""
Adapters for external systems and services.

These adapters implement the interfaces defined in workspace_assistant.interfaces
and provide concrete implementations for the language model, MongoDB and the
tool handler backend.
"""
