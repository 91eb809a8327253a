"""Helpers shared by the document handlers."""

from pathlib import Path

from pydantic import BaseModel, Field

from config import get_settings
from services import UploadedDocument
from utils import file_extension


class DocumentRequest(BaseModel):
    """Request body for endpoints that act on an uploaded file."""

    file_path: str | None = Field(None, description="Path returned by /upload")
    filename: str | None = Field(None, description="Original filename (optional)")


def upload_root() -> Path:
    """Resolved upload directory, created on demand."""
    root = Path(get_settings().upload_dir).resolve()
    root.mkdir(parents=True, exist_ok=True)
    return root


def resolve_uploaded_document(request: DocumentRequest) -> UploadedDocument | None:
    """Map a request to a file inside the upload directory.

    Returns None if no path was given, the path escapes the upload
    directory, the file does not exist or the path is not a valid path.
    """
    if not request.file_path:
        return None

    root = upload_root()
    try:
        path = Path(request.file_path).resolve()
        if not path.is_relative_to(root) or not path.is_file():
            return None
    except (OSError, ValueError):
        # NUL bytes, over-long names and the like
        return None

    filename = request.filename or path.name
    return UploadedDocument(
        file_path=str(path),
        original_filename=filename,
        file_extension=file_extension(path.name),
    )
