"""
Feature modules for the Axys auth backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Implementation
- exceptions.py: Module-specific exceptions

The session module composes the others through their interfaces only.
"""
