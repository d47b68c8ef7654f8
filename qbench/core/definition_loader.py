"""
Benchmark Definition Loader

Discovers definition files and parses them into BenchmarkSuite models.
Supported formats are chosen by file extension: TOML, JSON and YAML.

Every format shares one logical schema:

    queries:
      - name: <benchmark name>
        revisions:
          - name: <revision name>
            query: <timed statement>
            pre_script: <optional setup script>
            post_script: <optional teardown script>
"""

import fnmatch
import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import yaml
from pydantic import ValidationError

from qbench.errors import DefinitionParseError
from qbench.models.benchmark import BenchmarkFile, BenchmarkSuite

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _parse_toml(text: str) -> Any:
    return tomllib.loads(text)


def _parse_json(text: str) -> Any:
    return json.loads(text)


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


PARSERS: Dict[str, Callable[[str], Any]] = {
    ".toml": _parse_toml,
    ".json": _parse_json,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
}


def discover_files(directory: PathLike, pattern: str = "*.toml") -> List[Path]:
    """
    Find regular files in ``directory`` whose name matches ``pattern``.

    Matching is case-insensitive. The pattern may contain sub-directory
    components (e.g. ``"**/*.toml"``).

    Args:
        directory: Directory to search
        pattern: Glob pattern relative to ``directory``

    Returns:
        Matching files, sorted by path
    """
    base = Path(directory)
    if not base.is_dir():
        logger.warning(f"Benchmark directory does not exist: {base}")
        return []

    # Expand directory components with glob, match the file name ourselves.
    head, _, name_pattern = pattern.rpartition("/")
    name_pattern = name_pattern.lower()
    candidates = base.glob(f"{head}/*" if head else "*")
    files = [
        p
        for p in candidates
        if p.is_file() and fnmatch.fnmatchcase(p.name.lower(), name_pattern)
    ]
    return sorted(files)


def load_definition_file(path: PathLike) -> BenchmarkFile:
    """
    Parse one definition file.

    Raises:
        DefinitionParseError: Unsupported extension, malformed content or
            schema violation
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if not suffix:
        raise DefinitionParseError(
            str(path), "file has no extension, cannot determine parser"
        )
    parser = PARSERS.get(suffix)
    if parser is None:
        raise DefinitionParseError(str(path), f"unsupported file extension {suffix}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DefinitionParseError(str(path), str(e)) from e

    try:
        data = parser(text)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise DefinitionParseError(str(path), f"malformed content: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DefinitionParseError(str(path), "top level must be a table/object")

    try:
        return BenchmarkFile.model_validate(data)
    except ValidationError as e:
        raise DefinitionParseError(str(path), f"invalid definition: {e}") from e


def load_suite(directory: PathLike, pattern: str = "*.toml") -> BenchmarkSuite:
    """
    Load every matching definition file into a suite.

    Files that fail to parse are logged and skipped.
    """
    files = discover_files(directory, pattern)
    logger.info(f"Found {len(files)} definition file(s) in {directory}")

    parsed: List[BenchmarkFile] = []
    for path in files:
        try:
            parsed.append(load_definition_file(path))
        except DefinitionParseError as e:
            logger.error(str(e))
    return BenchmarkSuite.from_files(parsed)
