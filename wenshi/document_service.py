"""Document Service: HTTP host for the Wenshi editor front end."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from wenshi.core.config import settings
from wenshi.core.dependencies import services
from wenshi.core.exceptions import (
    ContentValidationError,
    FileStoreError,
    ParseError,
    SerializeError,
)
from wenshi.models.document import Document, ValidationOutcome
from wenshi.models.file_api import (
    ContentRequest,
    FileReadRequest,
    FileReadResponse,
    FileWriteRequest,
    OpenedDocument,
    SaveRequest,
    SaveResponse,
    SerializeRequest,
    SerializeResponse,
)
from wenshi.monitoring.metrics import track_validation

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Wenshi Document Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _file_error(e: FileStoreError) -> HTTPException:
    logger.error(f"File operation failed: {str(e)}")
    return HTTPException(status_code=404 if e.not_found else 400, detail=str(e))


@app.post("/validate", response_model=ValidationOutcome)
async def validate(request: ContentRequest) -> ValidationOutcome:
    """
    Validate plain-text content.

    Args:
        request: Text to check.

    Returns:
        Validation outcome.
    """
    outcome = services.validator.validate(request.content)
    track_validation(outcome.is_valid)
    return outcome


@app.post("/wen/parse", response_model=Document)
async def parse_wen(request: ContentRequest) -> Document:
    """
    Decode a .wen envelope.

    Args:
        request: Envelope text.

    Returns:
        Decoded document.
    """
    try:
        return services.codec.parse(request.content)
    except ParseError as e:
        logger.error(f"Parse failed: {str(e)}")
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/wen/serialize", response_model=SerializeResponse)
async def serialize_wen(request: SerializeRequest) -> SerializeResponse:
    """
    Encode content and timestamps as a .wen envelope.

    Args:
        request: Content and optional timestamps.

    Returns:
        Envelope text.
    """
    try:
        data = services.codec.serialize(
            request.content, request.created_at, request.modified_at)
    except SerializeError as e:
        logger.error(f"Serialize failed: {str(e)}")
        raise HTTPException(status_code=422, detail=str(e))
    return SerializeResponse(data=data)


@app.post("/files/read", response_model=FileReadResponse)
async def read_file(request: FileReadRequest) -> FileReadResponse:
    """Read a file as UTF-8 text."""
    try:
        content = services.file_store.read_file(request.path)
    except FileStoreError as e:
        raise _file_error(e)
    return FileReadResponse(path=request.path, content=content)


@app.post("/files/write")
async def write_file(request: FileWriteRequest) -> dict:
    """Write UTF-8 text to a file."""
    try:
        services.file_store.write_file(request.path, request.content)
    except FileStoreError as e:
        raise _file_error(e)
    return {"path": request.path, "written": True}


@app.post("/files/open", response_model=OpenedDocument)
async def open_file(request: FileReadRequest) -> OpenedDocument:
    """
    Open a .wen or plain-text document.

    Args:
        request: Path of the file to open.

    Returns:
        Document content and, for .wen files, its metadata.
    """
    try:
        return services.file_store.open_document(request.path)
    except FileStoreError as e:
        raise _file_error(e)
    except (ParseError, ContentValidationError) as e:
        logger.error(f"Open failed for {request.path}: {str(e)}")
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/files/save", response_model=SaveResponse)
async def save_file(request: SaveRequest) -> SaveResponse:
    """
    Save editor content as a .wen or plain-text document.

    Args:
        request: Destination, content and current metadata.

    Returns:
        Saved path and the metadata now on disk.
    """
    try:
        metadata = services.file_store.save_document(
            request.path,
            request.content,
            metadata=request.metadata,
            allow_metadata_loss=request.allow_metadata_loss,
        )
    except FileStoreError as e:
        raise _file_error(e)
    except (SerializeError, ContentValidationError) as e:
        logger.error(f"Save failed for {request.path}: {str(e)}")
        raise HTTPException(status_code=422, detail=str(e))
    return SaveResponse(path=request.path, metadata=metadata)


@app.get("/files/suggest-name")
async def suggest_name(current: Optional[str] = None) -> dict:
    """Suggest a file name for saving the current document."""
    return {"filename": services.file_store.suggest_filename(current)}


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.service_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.service_port)
