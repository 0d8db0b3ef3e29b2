"""
tracegrid.commands - CLI command implementations
"""

__all__ = [
    "catalog_cmd",
    "matrix_cmd",
    "summary_cmd",
]
