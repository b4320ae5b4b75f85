"""Codec for the .wen XML envelope."""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Callable, Optional

from wenshi.core.exceptions import ErrorKind, ParseError, SerializeError
from wenshi.models.document import Document
from wenshi.monitoring.metrics import parse_total, serialize_total, track_validation
from wenshi.services.timestamps import format_rfc3339, is_rfc3339
from wenshi.services.validator import ContentValidator, content_validator, trim_space

logger = logging.getLogger(__name__)

ENVELOPE_TAG = "wenshi"
ENVELOPE_VERSION = "1.0"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

REQUIRED_ATTRIBUTES = ("ver", "createdAt", "modifiedAt")
TIMESTAMP_ATTRIBUTES = ("createdAt", "modifiedAt")


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to CRLF throughout."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.replace("\n", "\r\n")


def escape_text(text: str) -> str:
    """Escape &, < and > for use as element character data."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attribute(value: str) -> str:
    """Escape a value for a double-quoted attribute."""
    return escape_text(value).replace('"', "&quot;")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _read_root(text: str) -> ET.Element:
    # Stop at the end of the first element; anything after it is ignored.
    parser = ET.XMLPullParser(events=("start", "end"))
    parser.feed(text)
    root = None
    for event, element in parser.read_events():
        if root is None:
            root = element
        elif event == "end" and element is root:
            return root
    parser.close()
    raise ET.ParseError("no element found")


def _character_data(element: ET.Element) -> str:
    # Text directly inside the element; text of nested elements is ignored.
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts)


class EnvelopeCodec:
    """Encoder and decoder between .wen envelopes and documents."""

    def __init__(
        self,
        validator: Optional[ContentValidator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize the codec.

        Args:
            validator: Content validator applied on both directions.
            clock: Source of the current instant for default timestamps.
        """
        self.validator = validator or content_validator
        self.clock = clock or (lambda: datetime.now().astimezone())

    def parse(self, text: str) -> Document:
        """
        Parse a serialized envelope.

        Args:
            text: Envelope text as read from a .wen file.

        Returns:
            Document with trimmed content and verbatim attributes.

        Raises:
            ParseError: If the XML, an attribute, or the content is invalid.
        """
        try:
            document = self._parse(text)
        except ParseError as e:
            logger.debug(f"Rejected .wen envelope: {e}")
            parse_total.labels(result="error").inc()
            raise
        parse_total.labels(result="ok").inc()
        return document

    def _parse(self, text: str) -> Document:
        try:
            root = _read_root(text)
        except ET.ParseError as e:
            raise ParseError(
                f"Invalid .wen file: {e}", ErrorKind.MALFORMED_XML, str(e))

        if _local_name(root.tag) != ENVELOPE_TAG:
            detail = f"expected element type <{ENVELOPE_TAG}> but have <{_local_name(root.tag)}>"
            raise ParseError(
                f"Invalid .wen file: {detail}", ErrorKind.MALFORMED_XML, detail)

        attributes = {name: root.get(name, "") for name in REQUIRED_ATTRIBUTES}

        for name in REQUIRED_ATTRIBUTES:
            if attributes[name] == "":
                raise ParseError(
                    f"Invalid .wen file: missing required attribute '{name}'",
                    ErrorKind.MISSING_ATTRIBUTE,
                    name,
                )

        for name in TIMESTAMP_ATTRIBUTES:
            if not is_rfc3339(attributes[name]):
                raise ParseError(
                    f"Invalid .wen file: invalid timestamp format in '{name}'",
                    ErrorKind.INVALID_TIMESTAMP,
                    name,
                )

        content = _character_data(root)
        outcome = self.validator.validate(content)
        track_validation(outcome.is_valid)
        if not outcome.is_valid:
            raise ParseError(
                f"Invalid .wen file content: {outcome.error_message}",
                ErrorKind.INVALID_CONTENT,
                outcome.error_message,
            )

        return Document(
            version=attributes["ver"],
            created_at=attributes["createdAt"],
            modified_at=attributes["modifiedAt"],
            content=trim_space(content),
        )

    def serialize(self, content: str, created_at: str = "", modified_at: str = "") -> str:
        """
        Serialize content and timestamps into an envelope.

        Empty timestamps are replaced by the current instant. Line endings
        in the content are written as CRLF.

        Args:
            content: Text to embed, validated exactly as given.
            created_at: RFC 3339 creation timestamp, or empty for now.
            modified_at: RFC 3339 modification timestamp, or empty for now.

        Returns:
            Envelope text ready to be written as UTF-8.

        Raises:
            SerializeError: If the content or a timestamp is invalid.
        """
        try:
            data = self._serialize(content, created_at, modified_at)
        except SerializeError as e:
            logger.debug(f"Refused to serialize .wen envelope: {e}")
            serialize_total.labels(result="error").inc()
            raise
        serialize_total.labels(result="ok").inc()
        return data

    def _serialize(self, content: str, created_at: str, modified_at: str) -> str:
        outcome = self.validator.validate(content)
        track_validation(outcome.is_valid)
        if not outcome.is_valid:
            raise SerializeError(
                f"Invalid content: {outcome.error_message}",
                ErrorKind.INVALID_CONTENT,
                outcome.error_message,
            )

        if created_at == "" or modified_at == "":
            now = format_rfc3339(self.clock())
            created_at = created_at or now
            modified_at = modified_at or now

        timestamps = {"createdAt": created_at, "modifiedAt": modified_at}
        for name in TIMESTAMP_ATTRIBUTES:
            if not is_rfc3339(timestamps[name]):
                raise SerializeError(
                    f"Invalid timestamp format in '{name}'",
                    ErrorKind.INVALID_TIMESTAMP,
                    name,
                )

        body = escape_text(normalize_newlines(content))
        return (
            f"{XML_DECLARATION}\n"
            f'<{ENVELOPE_TAG} ver="{escape_attribute(ENVELOPE_VERSION)}" '
            f'createdAt="{escape_attribute(created_at)}" '
            f'modifiedAt="{escape_attribute(modified_at)}">'
            f"{body}</{ENVELOPE_TAG}>"
        )


envelope_codec = EnvelopeCodec()

