"""
tracegrid.config.defaults - Default configuration values.
"""

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "symbols": {
        # Indexer dump read by the JSON symbol source
        "index": "symbols.json",
    },
    "matrix": {
        "title": "TraceGrid: Traceability Matrix",
        "description": "Complete relationship matrix for project traceability analysis",
    },
    "catalog": {
        # Extension keywords treated as relations in addition to the built-in table
        "extra_relations": [],
    },
    "filter": {
        "relationship_types": [],
        "source_types": [],
        "target_types": [],
        "show_valid": True,
        "show_broken": True,
        "show_empty": True,
    },
    "export": {
        "format": "csv",
        "include_metadata": True,
        "include_summary": True,
    },
}
