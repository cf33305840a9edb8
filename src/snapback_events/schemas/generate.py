"""JSON Schema generation script for snapback-events models."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from snapback_events.schemas import build_schema, list_schemas, schema_to_json


def generate_all_schemas() -> Dict[str, Dict[str, Any]]:
    """Generate all schemas and return them as a dict.

    Returns:
        Dict mapping schema name to schema dict
    """
    return {name: build_schema(name) for name in list_schemas()}


def write_schema_file(directory: Path, name: str, schema: Dict[str, Any]) -> Path:
    """Write one schema to ``{directory}/{name}.schema.json``."""
    path = directory / f"{name}.schema.json"
    path.write_text(schema_to_json(schema), encoding="utf-8")
    print(f"Generated {path}")
    return path


def write_all_schemas(schemas: Dict[str, Dict[str, Any]], directory: Path) -> None:
    """Write all schemas to disk, creating *directory* if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, schema in schemas.items():
        write_schema_file(directory, name, schema)


def check_drift(directory: Path) -> int:
    """Check if generated schemas match the files in *directory*.

    Returns:
        0 if all schemas match, 1 if any drift detected
    """
    schemas = generate_all_schemas()
    drift_detected = False

    for name, schema in schemas.items():
        path = directory / f"{name}.schema.json"
        expected_content = schema_to_json(schema)

        if not path.exists():
            print(f"ERROR: Missing schema file: {path}", file=sys.stderr)
            drift_detected = True
            continue

        actual_content = path.read_text(encoding="utf-8")

        if actual_content != expected_content:
            print(f"ERROR: Schema drift detected in {path}", file=sys.stderr)
            drift_detected = True

    # Check for orphaned schema files not in the registry
    expected_files = {f"{name}.schema.json" for name in schemas}
    actual_files = {p.name for p in directory.glob("*.schema.json")}
    for orphan in sorted(actual_files - expected_files):
        print(f"Orphaned schema {orphan}", file=sys.stderr)
        drift_detected = True

    if drift_detected:
        print("\nSchema drift detected. Run without --check to regenerate.", file=sys.stderr)
        return 1

    print(f"All {len(schemas)} schemas are up to date.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for schema generation script.

    Returns:
        Exit code (0 for success, 1 for failure/drift)
    """
    parser = argparse.ArgumentParser(
        description="Generate JSON schemas for snapback-events models"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("schemas"),
        help="Directory holding the *.schema.json files (default: ./schemas)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check for schema drift without writing files (CI mode)",
    )
    args = parser.parse_args(argv)

    if args.check:
        return check_drift(args.output_dir)

    schemas = generate_all_schemas()
    write_all_schemas(schemas, args.output_dir)
    print(f"\nSuccessfully generated {len(schemas)} schemas.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
