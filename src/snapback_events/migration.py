"""Batch migration of legacy telemetry events to canonical events.

Usage:
    snapback-migrate-events <input-file> <output-file>
    python -m snapback_events.migration <input-file> <output-file>

Reads a JSON array of legacy events, writes the canonical events to
``output-file`` and, when some events have no canonical form, writes those to
``<input-stem>-unmapped<suffix>`` next to the input file.

The whole batch is held in memory; nothing is written until every record has
been read and mapped.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from snapback_events.mapper import LegacyEventMapper
from snapback_events.models import MigrationError, SnapbackEventsError

PathLike = Union[str, Path]


@dataclass(frozen=True)
class MigrationResult:
    """Order-preserving partition of a migrated batch."""

    mapped: Tuple[Any, ...]
    unmapped: Tuple[Any, ...]

    @property
    def total(self) -> int:
        return len(self.mapped) + len(self.unmapped)


@dataclass(frozen=True)
class MigrationReport:
    """Summary of a file-to-file migration run."""

    input_path: Path
    output_path: Path
    unmapped_path: Optional[Path]
    read_count: int
    mapped_count: int
    unmapped_count: int


def migrate(
    legacy_events: Sequence[Any],
    mapper: Optional[LegacyEventMapper] = None,
) -> MigrationResult:
    """Map every legacy event, routing the ones without a mapping to ``unmapped``.

    Args:
        legacy_events: Legacy wire dicts or legacy event models.
        mapper: Mapper to use; a fresh default mapper when omitted.

    Returns:
        MigrationResult whose buckets keep the relative input order.
        Unmapped records are kept exactly as given.
    """
    active = mapper if mapper is not None else LegacyEventMapper()
    mapped: List[Any] = []
    unmapped: List[Any] = []
    for record in legacy_events:
        core_event = active.map_event(record)
        if core_event is not None:
            mapped.append(core_event)
        else:
            unmapped.append(record)
    return MigrationResult(mapped=tuple(mapped), unmapped=tuple(unmapped))


def read_event_batch(path: PathLike) -> List[Any]:
    """Read a JSON array of events.

    Raises:
        MigrationError: If the file cannot be read or decoded as UTF-8, is not
            valid JSON (including nesting too deep to decode), or its
            top-level value is not an array.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MigrationError(f"Cannot read {path}: {e}") from e
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MigrationError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, list):
        raise MigrationError("Input file must contain an array of events")
    return data


def _dump_batch(records: Sequence[Any]) -> str:
    payload = [r.to_dict() if hasattr(r, "to_dict") else r for r in records]
    return json.dumps(payload, indent=2) + "\n"


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise MigrationError(f"Cannot write {path}: {e}") from e


def write_event_batch(path: PathLike, records: Sequence[Any]) -> None:
    """Write records as an indented JSON array.

    Raises:
        MigrationError: If the file cannot be written.
    """
    _write_text(Path(path), _dump_batch(records))


def unmapped_path_for(input_path: PathLike) -> Path:
    """``events.json`` -> ``events-unmapped.json`` in the same directory."""
    path = Path(input_path)
    return path.with_name(f"{path.stem}-unmapped{path.suffix}")


def migrate_file(
    input_path: PathLike,
    output_path: PathLike,
    *,
    unmapped_path: Optional[PathLike] = None,
    mapper: Optional[LegacyEventMapper] = None,
) -> MigrationReport:
    """Migrate a JSON file of legacy events to a JSON file of canonical events.

    Args:
        input_path: File holding a JSON array of legacy events.
        output_path: Destination for the canonical events (always written).
        unmapped_path: Destination for unmapped events; defaults to
            :func:`unmapped_path_for` of the input. Only written when at
            least one event could not be mapped.
        mapper: Mapper to use; a fresh default mapper when omitted.

    Raises:
        MigrationError: On unreadable input, malformed JSON, a non-array
            top level, or a failed write. A failed write leaves no output
            file behind.
    """
    source = Path(input_path)
    target = Path(output_path)
    events = read_event_batch(source)
    result = migrate(events, mapper=mapper)

    mapped_text = _dump_batch(result.mapped)
    written_unmapped: Optional[Path] = None
    unmapped_text = ""
    if result.unmapped:
        written_unmapped = (
            Path(unmapped_path) if unmapped_path is not None else unmapped_path_for(source)
        )
        unmapped_text = _dump_batch(result.unmapped)

    _write_text(target, mapped_text)
    if written_unmapped is not None:
        try:
            _write_text(written_unmapped, unmapped_text)
        except MigrationError:
            target.unlink(missing_ok=True)
            raise

    return MigrationReport(
        input_path=source,
        output_path=target,
        unmapped_path=written_unmapped,
        read_count=len(events),
        mapped_count=len(result.mapped),
        unmapped_count=len(result.unmapped),
    )


def _print_usage(prog: str) -> None:
    print(f"Usage: {prog} <input-file> <output-file>")
    print("  input-file: Path to JSON file containing legacy events array")
    print("  output-file: Path to write converted core events")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the migration command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(
        prog="snapback-migrate-events",
        description="Convert legacy telemetry events to canonical core events",
        exit_on_error=False,
    )
    parser.add_argument("input_file", nargs="?", help="JSON array of legacy events")
    parser.add_argument("output_file", nargs="?", help="Where to write core events")
    parser.add_argument(
        "--unmapped-output",
        default=None,
        help="Where to write unmapped events (default: <input>-unmapped.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log a diagnostic line for every record that is not mapped",
    )
    # Arguments past the two paths are ignored
    try:
        args, _ = parser.parse_known_args(argv)
    except argparse.ArgumentError as e:
        print(f"Migration failed: {e}", file=sys.stderr)
        _print_usage(parser.prog)
        return 1

    if args.input_file is None or args.output_file is None:
        _print_usage(parser.prog)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        report = migrate_file(
            args.input_file,
            args.output_file,
            unmapped_path=args.unmapped_output,
        )
    except (SnapbackEventsError, OSError) as e:
        print(f"Migration failed: {e}", file=sys.stderr)
        return 1

    print(f"Read {report.read_count} legacy events from {report.input_path}")
    print(f"Converted {report.mapped_count} events to core format")
    print(
        f"{report.unmapped_count} events could not be mapped "
        "(contributing to derived metrics only)"
    )
    print(f"Wrote {report.mapped_count} core events to {report.output_path}")
    if report.unmapped_path is not None:
        print(f"Wrote {report.unmapped_count} unmapped events to {report.unmapped_path}")
    print("Migration completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
