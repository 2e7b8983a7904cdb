"""
Mapper helpers
Partial payload schemas and path normalization shared by provider mappers.
"""
import re
from typing import Annotated, Any, Callable, Iterable, List, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError

from debridkit.models import DebridFile

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ValueError("expected a scalar")
    return str(value)


def _coerce_size(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError("expected a number")
    if isinstance(value, int):
        return value if value > 0 else 0
    try:
        size = int(float(value))
    except (TypeError, OverflowError) as e:
        raise ValueError(str(e)) from e
    return size if size > 0 else 0


Text = Annotated[str, BeforeValidator(_coerce_text)]
Size = Annotated[int, BeforeValidator(_coerce_size)]
Records = Annotated[List[Any], BeforeValidator(lambda v: as_list(v))]
Flag = Annotated[bool, BeforeValidator(lambda v: False if v is None else v)]


class RawModel(BaseModel):
    """Partial view of a provider payload. Unknown fields are kept, missing ones default."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)


def normalize_path(path: str) -> str:
    """
    Canonical form used for comparisons and returned paths.
    "\\Folder//file  name.mkv " -> "Folder/file name.mkv"
    """
    path = (path or "").replace("\\", "/")
    path = re.sub(r"/{2,}", "/", path)
    path = re.sub(r" {2,}", " ", path)
    return path.strip().lstrip("/")


def strip_root_folder(path: str) -> str:
    """
    Strip the torrent-name folder some providers prepend.
    So "SomeTorrent/file.mp4" becomes "file.mp4"
    """
    path = normalize_path(path)
    if "/" in path:
        return path.split("/", 1)[1]
    return path


def parse_record(model: Type[ModelT], record: Any) -> Optional[ModelT]:
    """Validate one raw record, returning None when it is malformed."""
    if not isinstance(record, dict):
        logger.debug(f"Skipping malformed record: {record!r}")
        return None
    try:
        return model.model_validate(record)
    except ValidationError as e:
        logger.debug(f"Skipping malformed record {record!r}: {e.error_count()} error(s)")
        return None


def map_records(records: Any, map_one: Callable[[dict], Optional[DebridFile]]) -> List[DebridFile]:
    """Apply map_one to every record, skipping the ones it rejects."""
    if not isinstance(records, list):
        return []
    files = []
    for record in records:
        mapped = map_one(record)
        if mapped is not None:
            files.append(mapped)
    return files


def as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if value is None:
        return []
    return [value]


def first_match(items: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    for item in items:
        if predicate(item):
            return item
    return None
