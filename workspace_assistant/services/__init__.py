"""
Service implementations for the Workspace Assistant.

These services implement the orchestration logic: intent classification,
tool selection and execution, error policy, monitoring and the
conversation step loop.
"""
