"""
Tool catalog for the Workspace Assistant.

This package provides the process-wide tool catalog, the default tool
definitions and the bound callables exposed to the language model.
"""
