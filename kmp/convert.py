"""
Conversion orchestrator — parse one file, assemble the canonical layout,
write it next to the source.

Files are converted sequentially and independently; a failure in one file
is captured in its ConversionResult and never stops the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from kmp import OUTPUT_SUFFIX
from kmp._format.document import Diagnostic
from kmp._format.errors import ErrorKind, KMPFormatError
from kmp._format.reader import KMPReader
from kmp._format.writer import KMPWriter

log = logging.getLogger(__name__)

# Default config
DEFAULT_CONFIG = {
    "output_suffix": OUTPUT_SUFFIX,
    "strict": True,
    "log_level": "INFO",
}

DEFAULT_CONFIG_PATH = Path.home() / ".kmp" / "updater.toml"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load updater config from TOML file, falling back to defaults."""
    config = dict(DEFAULT_CONFIG)

    path = config_path or DEFAULT_CONFIG_PATH
    if path.is_file():
        try:
            import tomllib
        except ImportError:
            import tomli as tomllib

        try:
            with open(path, "rb") as f:
                file_config = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            log.warning("Failed to load config from %s: %s", path, e)
            return config

        unknown = set(file_config) - set(DEFAULT_CONFIG)
        if unknown:
            log.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
        for key, value in file_config.items():
            if key not in DEFAULT_CONFIG:
                continue
            expected = type(DEFAULT_CONFIG[key])
            if not isinstance(value, expected):
                log.warning(
                    "Ignoring config key %s: expected %s, got %s",
                    key, expected.__name__, type(value).__name__,
                )
                continue
            config[key] = value

    return config


@dataclass
class ConversionResult:
    """Outcome of converting one file."""

    source: Path
    output: Path | None = None
    ok: bool = False
    error_kind: ErrorKind | None = None
    detail: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    bytes_written: int = 0


def output_path_for(path: str | Path, suffix: str = OUTPUT_SUFFIX) -> Path:
    """Sibling output path: ``course.kmp`` -> ``course.new.kmp``."""
    path = Path(path)
    if path.suffix:
        return path.with_suffix(suffix)
    return path.with_name(path.name + suffix)


def convert_bytes(data: bytes, strict: bool = True) -> bytes:
    """Re-encode a container in the canonical layout."""
    doc = KMPReader.parse(data, strict=strict)
    return KMPWriter.serialize(doc)


def convert_file(
    path: str | Path,
    output: str | Path | None = None,
    strict: bool = True,
    suffix: str = OUTPUT_SUFFIX,
) -> ConversionResult:
    """Convert one file. Format and I/O errors are returned, not raised."""
    source = Path(path)
    result = ConversionResult(source=source)

    try:
        doc = KMPReader.read(source, strict=strict)
    except KMPFormatError as e:
        log.info("Skipping %s: %s", source, e)
        result.error_kind = e.kind
        result.detail = str(e)
        return result
    except OSError as e:
        result.error_kind = ErrorKind.IO
        result.detail = str(e)
        return result

    result.diagnostics = list(doc.diagnostics)
    target = Path(output) if output else output_path_for(source, suffix)

    try:
        result.bytes_written = KMPWriter.write(doc, target)
    except OSError as e:
        log.error("Failed to write %s: %s", target, e)
        result.error_kind = ErrorKind.IO
        result.detail = str(e)
        return result

    log.debug("Wrote %d bytes to %s", result.bytes_written, target)
    result.output = target
    result.ok = True
    return result


def convert_files(
    paths: Iterable[str | Path],
    strict: bool = True,
    suffix: str = OUTPUT_SUFFIX,
) -> list[ConversionResult]:
    """Convert each existing file in turn. Missing paths are skipped."""
    results = []
    for path in paths:
        if not Path(path).is_file():
            log.debug("Skipping missing file: %s", path)
            continue
        results.append(convert_file(path, strict=strict, suffix=suffix))
    return results
