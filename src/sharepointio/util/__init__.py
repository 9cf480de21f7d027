from .paths import (
    SEPARATOR,
    check_extension,
    encode_remote_path,
    file_extension,
    split_remote_path,
    validate_remote_path,
)
from .staging import staged_file
from .time import parse_rfc3339

__all__ = [
    "SEPARATOR",
    "split_remote_path",
    "validate_remote_path",
    "file_extension",
    "check_extension",
    "encode_remote_path",
    "staged_file",
    "parse_rfc3339",
]
