"""Shared utilities — configuration and logging setup.

Rules
-----
* No business logic.
* Importable by any layer.
"""
