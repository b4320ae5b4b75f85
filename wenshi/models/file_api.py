"""Pydantic models for the document service API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentRequest(BaseModel):
    """Model carrying raw text, either plain content or a serialized envelope."""

    content: str


class SerializeRequest(BaseModel):
    """Model for serializing content into a .wen envelope."""

    model_config = ConfigDict(populate_by_name=True)

    content: str
    created_at: str = Field(default="", alias="createdAt")
    modified_at: str = Field(default="", alias="modifiedAt")


class SerializeResponse(BaseModel):
    """Model for a serialized envelope."""

    data: str


class DocumentMetadata(BaseModel):
    """Envelope attributes kept alongside an opened document."""

    model_config = ConfigDict(populate_by_name=True)

    ver: str
    created_at: str = Field(..., alias="createdAt")
    modified_at: str = Field(..., alias="modifiedAt")


class FileReadRequest(BaseModel):
    """Model for reading a file."""

    path: str = Field(..., min_length=1)


class FileReadResponse(BaseModel):
    """Model for file read response."""

    path: str
    content: str


class FileWriteRequest(BaseModel):
    """Model for writing a file."""

    path: str = Field(..., min_length=1)
    content: str


class OpenedDocument(BaseModel):
    """Model for a document opened from disk."""

    path: str
    content: str
    metadata: Optional[DocumentMetadata] = None


class SaveRequest(BaseModel):
    """Model for saving editor content to disk."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., min_length=1)
    content: str
    metadata: Optional[DocumentMetadata] = None
    allow_metadata_loss: bool = Field(default=False, alias="allowMetadataLoss")


class SaveResponse(BaseModel):
    """Model for save response."""

    path: str
    metadata: Optional[DocumentMetadata] = None
