#!/usr/bin/env python3
"""
Export the OpenAPI document of the Venue Seating Platform API.

Usage:
    python miscellaneous/export_openapi.py [output_file]
"""

import json
import os
import sys

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from venue_seating_platform.main import app


def export_openapi_spec(output_file: str = "openapi.json") -> bool:
    """Write the OpenAPI document to ``output_file`` and list its paths."""
    try:
        openapi_schema = app.openapi()

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(openapi_schema, f, indent=2, ensure_ascii=False)

        info = openapi_schema.get("info", {})
        paths = openapi_schema.get("paths", {})
        endpoint_count = sum(len(methods) for methods in paths.values())

        print(f"OpenAPI document written to {output_file}")
        print(f"{info.get('title', 'unknown')} {info.get('version', 'unknown')}: {endpoint_count} endpoints")
        for path in sorted(paths):
            print(f"  {path}: {', '.join(method.upper() for method in paths[path])}")
        return True

    except OSError as e:
        print(f"Failed to write OpenAPI document: {e}")
        return False


def main():
    output_file = sys.argv[1] if len(sys.argv) > 1 else "openapi.json"
    if not export_openapi_spec(output_file):
        sys.exit(1)


if __name__ == "__main__":
    main()
