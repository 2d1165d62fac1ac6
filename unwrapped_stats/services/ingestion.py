"""Loading of streaming history export files"""
import json
import logging
import os
from typing import Any, Dict, Iterable, List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

JSON_SUFFIX = '.json'
ARCHIVE_SUFFIXES = ('.zip',)


def _reject_archive(path: str) -> None:
    if path.lower().endswith(ARCHIVE_SUFFIXES):
        logger.error(f"Archive given as input: {path}")
        raise ValueError(
            f"ZIP file support requires extraction: {path}. "
            "Please extract the archive and provide the JSON files inside."
        )


def load_history_file(path: PathLike) -> List[Dict[str, Any]]:
    """
    Read one export file and return its play records.

    A top-level JSON array contributes its object elements, a single top-level
    object contributes itself.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: archives, non-JSON files and invalid JSON content
    """
    path = os.fspath(path)
    _reject_archive(path)
    if not path.lower().endswith(JSON_SUFFIX):
        raise ValueError(f"Unsupported file type (expected .json): {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.error(f"Streaming history file not found: {path}")
        raise
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Failed to decode JSON from {path}: {e}")
        raise ValueError(f"Invalid streaming history JSON in {path}: {e}") from e

    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of plays in {path}, got {type(data).__name__}")

    records = [entry for entry in data if isinstance(entry, dict)]
    dropped = len(data) - len(records)
    if dropped:
        logger.warning(f"Dropped {dropped} non-object entries from {path}")
    logger.info(f"Loaded {len(records)} plays from {os.path.basename(path)}")
    return records


def _expand(source: PathLike) -> List[str]:
    """List the export files behind a file or directory path"""
    path = os.fspath(source)
    if os.path.isdir(path):
        names = sorted(os.listdir(path))
        for name in names:
            _reject_archive(os.path.join(path, name))
        return [
            os.path.join(path, name) for name in names
            if name.lower().endswith(JSON_SUFFIX) and os.path.isfile(os.path.join(path, name))
        ]
    if os.path.exists(path):
        return [path]
    raise FileNotFoundError(f"No streaming history found at {path}")


def load_streaming_history(source: Union[PathLike, Iterable[PathLike]]) -> List[Dict[str, Any]]:
    """
    Union the play records of every export file behind source.

    Args:
        source: A .json file, a directory of .json files, or an iterable of either

    Raises:
        FileNotFoundError: a path does not exist
        ValueError: unsupported/invalid files, or no plays at all
    """
    if isinstance(source, (str, os.PathLike)):
        sources = [source]
    else:
        sources = list(source)

    files: List[str] = []
    for item in sources:
        files.extend(_expand(item))

    all_streams: List[Dict[str, Any]] = []
    for path in files:
        all_streams.extend(load_history_file(path))

    if not all_streams:
        raise ValueError("No valid streaming data found. Please make sure you provided JSON export files.")

    logger.info(f"Loaded {len(all_streams)} plays from {len(files)} file(s)")
    return all_streams
