"""Codec interface shared by all format adapters."""

from __future__ import annotations

from typing import Any

from sharepointio.util.paths import check_extension


class Codec:
    """
    Decode a staged local file into a value, or encode a value into one.

    Subclasses set:
        label: Human readable format name used in messages.
        suffix: Extension (with dot) of the staged local file.
        read_extensions / write_extensions: Allow-lists for the remote path
            (lowercase, without dot). Empty means any extension.
    """

    label: str = "Data"
    suffix: str = ""
    read_extensions: tuple[str, ...] = ()
    write_extensions: tuple[str, ...] = ()

    def staging_suffix(self, path: str) -> str:
        return self.suffix

    def check_read_path(self, path: str) -> None:
        if self.read_extensions:
            check_extension(path, self.read_extensions, self.label)

    def check_write_path(self, path: str) -> None:
        if self.write_extensions:
            check_extension(path, self.write_extensions, self.label)

    def decode(self, local_path: str) -> Any:
        raise NotImplementedError

    def encode(self, value: Any, local_path: str) -> None:
        raise NotImplementedError
