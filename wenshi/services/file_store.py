"""Host file service for opening and saving Wenshi documents."""

import logging
from pathlib import Path
from typing import Optional

from wenshi.core.config import settings
from wenshi.core.exceptions import ContentValidationError, FileStoreError
from wenshi.models.file_api import DocumentMetadata, OpenedDocument
from wenshi.monitoring.metrics import file_operations_total, track_validation
from wenshi.services.envelope import ENVELOPE_VERSION, EnvelopeCodec, envelope_codec
from wenshi.services.timestamps import format_rfc3339
from wenshi.services.validator import ContentValidator, content_validator

logger = logging.getLogger(__name__)

WEN_SUFFIX = ".wen"
TXT_SUFFIX = ".txt"


def is_wen_path(path: str) -> bool:
    """Check whether a path names a .wen file."""
    return Path(path).suffix.lower() == WEN_SUFFIX


class FileStore:
    """Service reading and writing documents on the local filesystem."""

    def __init__(
        self,
        codec: Optional[EnvelopeCodec] = None,
        validator: Optional[ContentValidator] = None,
        files_root: Optional[str] = None,
        default_filename: Optional[str] = None,
    ) -> None:
        """
        Initialize the file store.

        Args:
            codec: Envelope codec for .wen files.
            validator: Validator for plain-text files.
            files_root: Directory all paths must stay within, if any.
            default_filename: Suggested name for a document never saved.
        """
        self.codec = codec or envelope_codec
        self.validator = validator or content_validator
        root = files_root if files_root is not None else settings.files_root
        self.files_root = Path(root).resolve() if root else None
        self.default_filename = default_filename or settings.default_filename

    def _resolve(self, path: str) -> Path:
        resolved = Path(path)
        if self.files_root is None:
            return resolved
        if not resolved.is_absolute():
            resolved = self.files_root / resolved
        resolved = resolved.resolve()
        if resolved != self.files_root and self.files_root not in resolved.parents:
            raise FileStoreError(f"Path is outside the files root: {path}")
        return resolved

    def read_file(self, path: str) -> str:
        """
        Read a file as UTF-8 text.

        Args:
            path: File path.

        Returns:
            File content.

        Raises:
            FileStoreError: If the file cannot be read or decoded.
        """
        target = self._resolve(path)
        try:
            content = target.read_bytes().decode("utf-8")
        except FileNotFoundError:
            raise FileStoreError(f"File not found: {path}", not_found=True)
        except (OSError, UnicodeDecodeError) as e:
            raise FileStoreError(f"Failed to read {path}: {str(e)}")
        file_operations_total.labels(op="read").inc()
        return content

    def write_file(self, path: str, content: str) -> None:
        """
        Write text to a file as UTF-8, replacing any existing content.

        Raises:
            FileStoreError: If the file cannot be written.
        """
        target = self._resolve(path)
        try:
            # newline="" keeps CRLF line endings byte-exact
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise FileStoreError(f"Failed to write {path}: {str(e)}")
        file_operations_total.labels(op="write").inc()

    def open_document(self, path: str) -> OpenedDocument:
        """
        Open a document from disk.

        A .wen file is decoded and its envelope attributes returned as
        metadata. Any other file is treated as plain text and validated.

        Args:
            path: File path.

        Returns:
            Opened document.

        Raises:
            FileStoreError: If the file cannot be read.
            ParseError: If a .wen file is not a valid envelope.
            ContentValidationError: If plain text fails validation.
        """
        raw = self.read_file(path)

        if is_wen_path(path):
            document = self.codec.parse(raw)
            metadata = DocumentMetadata(
                ver=document.version,
                created_at=document.created_at,
                modified_at=document.modified_at,
            )
            file_operations_total.labels(op="open").inc()
            logger.info(f"Opened .wen document {path}")
            return OpenedDocument(path=path, content=document.content, metadata=metadata)

        outcome = self.validator.validate(raw)
        track_validation(outcome.is_valid)
        if not outcome.is_valid:
            raise ContentValidationError(outcome)
        file_operations_total.labels(op="open").inc()
        logger.info(f"Opened text document {path}")
        return OpenedDocument(path=path, content=raw)

    def save_document(
        self,
        path: str,
        content: str,
        metadata: Optional[DocumentMetadata] = None,
        allow_metadata_loss: bool = False,
    ) -> Optional[DocumentMetadata]:
        """
        Save a document to disk.

        A .wen file keeps the creation time from the existing metadata and
        takes the save instant as its modification time. Saving a document
        that carries metadata as plain text drops that metadata and must be
        allowed explicitly.

        Args:
            path: Destination path.
            content: Editor content.
            metadata: Envelope attributes of the opened document, if any.
            allow_metadata_loss: Permit saving a .wen document as plain text.

        Returns:
            Metadata written for a .wen file, None for plain text.

        Raises:
            FileStoreError: If the file cannot be written or metadata would be lost.
            SerializeError: If content is not valid for a .wen file.
            ContentValidationError: If plain text fails validation.
        """
        if is_wen_path(path):
            now = format_rfc3339(self.codec.clock())
            created_at = metadata.created_at if metadata else now
            data = self.codec.serialize(content, created_at, now)
            self.write_file(path, data)
            file_operations_total.labels(op="save").inc()
            logger.info(f"Saved .wen document {path}")
            return DocumentMetadata(
                ver=ENVELOPE_VERSION, created_at=created_at, modified_at=now)

        if metadata is not None and not allow_metadata_loss:
            raise FileStoreError(
                f"Saving as {Path(path).suffix or 'plain text'} drops .wen metadata; "
                "confirm to continue")

        outcome = self.validator.validate(content)
        track_validation(outcome.is_valid)
        if not outcome.is_valid:
            raise ContentValidationError(outcome)
        self.write_file(path, content)
        file_operations_total.labels(op="save").inc()
        logger.info(f"Saved text document {path}")
        return None

    def suggest_filename(self, current_path: Optional[str] = None) -> str:
        """
        Suggest a file name for the save dialog.

        Args:
            current_path: Path of the open document, if it has one.

        Returns:
            Base name ending in .wen for text files, the default name otherwise.
        """
        if not current_path:
            return self.default_filename
        name = Path(current_path).name
        if Path(name).suffix.lower() == TXT_SUFFIX:
            return Path(name).stem + WEN_SUFFIX
        return name
