"""
Core infrastructure for promptweave.

Shared components used across modules:
- Logging configuration
"""
