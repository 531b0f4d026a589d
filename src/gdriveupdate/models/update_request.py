"""Update request model and partial metadata patch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from gdriveupdate.errors import InvalidArgumentError
from gdriveupdate.util.mime import is_folder

DEFAULT_CHUNK_SIZE: int = 8 * 1024 * 1024
DEFAULT_TIMEOUT: float = 300.0


@dataclass(slots=True, frozen=True)
class MetadataPatch:
    """
    Metadata fields to change on the remote file.

    None means "not provided": the field is left untouched on Drive.
    An empty description is an explicit value and clears the description.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.name is not None and not self.name.strip():
            raise InvalidArgumentError("name must not be empty when provided")
        if self.mime_type is not None and not self.mime_type.strip():
            raise InvalidArgumentError("mime_type must not be empty when provided")

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.description is None and self.mime_type is None

    def to_body(self) -> dict[str, Any]:
        """Drive `files` resource body containing only the provided fields."""
        body: dict[str, Any] = {}
        if self.name is not None:
            body["name"] = self.name
        if self.description is not None:
            body["description"] = self.description
        if self.mime_type is not None:
            body["mimeType"] = self.mime_type
        return body


@dataclass(slots=True, frozen=True)
class UpdateRequest:
    """
    A single update of one Drive file.

    Attributes:
        file_id: Drive file ID to update.
        path: Local file whose content replaces the remote content. None or ""
            means metadata/parents only.
        name: New display name. When uploading and not given, the local
            file's base name is used.
        description: New description ("" clears it).
        mime_type: New MIME type. When uploading and not given, it is inferred
            from the resolved name's extension.
        parents: Desired parent folder IDs. Empty means "leave parents alone".
        chunk_size: Upload chunk size in bytes (only used when uploading).
        timeout: Inactivity timeout in seconds; <= 0 disables it.
    """

    file_id: str
    path: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = None
    parents: Sequence[str] = ()
    chunk_size: int = DEFAULT_CHUNK_SIZE
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not isinstance(self.file_id, str) or not self.file_id.strip():
            raise InvalidArgumentError("file_id must be a non-empty string")

        if not self.path:
            object.__setattr__(self, "path", None)

        parents = tuple(self.parents)
        for parent_id in parents:
            if not isinstance(parent_id, str) or not parent_id.strip():
                raise InvalidArgumentError(
                    "parents must contain non-empty strings",
                    details={"parents": list(parents)},
                )
        object.__setattr__(self, "parents", parents)

        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise InvalidArgumentError("chunk_size must be an int")
        if self.chunk_size <= 0:
            raise InvalidArgumentError(
                "chunk_size must be positive",
                details={"chunk_size": self.chunk_size},
            )

        if self.path is not None and is_folder(self.mime_type):
            raise InvalidArgumentError("Cannot upload content as a folder")

        # Validates name / mime_type early.
        self.metadata_patch()

    @property
    def has_content(self) -> bool:
        return self.path is not None

    @property
    def has_parents(self) -> bool:
        return bool(self.parents)

    @property
    def timeout_enabled(self) -> bool:
        return self.timeout > 0

    def metadata_patch(self) -> MetadataPatch:
        """Patch built from the explicitly provided fields only."""
        return MetadataPatch(
            name=self.name,
            description=self.description,
            mime_type=self.mime_type,
        )
