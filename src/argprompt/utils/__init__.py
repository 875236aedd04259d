"""Shared utilities — naming, mapping and calling helpers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""
