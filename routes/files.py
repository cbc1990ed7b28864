"""
Photo upload and download endpoints for moments.
Supports images (jpg, png, gif, webp, heic).
"""
from fastapi import APIRouter, UploadFile, File, HTTPException, Depends
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from typing import Optional
import os
import uuid
from pathlib import Path

from config import UPLOAD_DIR
from database import get_db
from models.Trip import Trip
from utils.logger import setup_api_logger

logger = setup_api_logger()
router = APIRouter(prefix="/files", tags=["Files"])

PHOTOS_DIR = Path(UPLOAD_DIR) / "photos"
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp", "image/heic"}
EXTENSION_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".heic": "image/heic",
}


def resolve_content_type(file: UploadFile) -> Optional[str]:
    """Content type of the upload, guessed from the extension when the client sent none."""
    content_type = file.content_type
    if (not content_type or content_type == "application/octet-stream") and file.filename:
        content_type = EXTENSION_TYPES.get(Path(file.filename).suffix.lower())
    return content_type


def validate_photo(file: UploadFile) -> str:
    content_type = resolve_content_type(file)
    if not content_type or content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"File type not allowed. Allowed: jpg, png, gif, webp, heic. Got: {content_type or 'unknown'}"
        )
    return content_type


def photo_path(filename: str) -> Path:
    # Only bare file names, never paths
    if not filename or Path(filename).name != filename or filename.startswith("."):
        raise HTTPException(status_code=400, detail="Invalid file name")
    return PHOTOS_DIR / filename


@router.post("/photos")
async def upload_photo(
    file: UploadFile = File(...),
    trip_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """
    Upload the photo of a moment. The returned url goes into the moment's
    photo_ref when the moment is saved.
    """
    content_type = validate_photo(file)

    if trip_id is not None:
        if not db.query(Trip).filter(Trip.id == trip_id).first():
            raise HTTPException(status_code=404, detail="Trip not found")

    content = await file.read()

    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {MAX_FILE_SIZE / (1024 * 1024):.1f} MB"
        )

    file_ext = Path(file.filename or "").suffix.lower() or ".jpg"
    unique_filename = f"{uuid.uuid4()}{file_ext}"

    PHOTOS_DIR.mkdir(parents=True, exist_ok=True)
    with open(PHOTOS_DIR / unique_filename, "wb") as buffer:
        buffer.write(content)

    logger.info("Stored photo %s (%d bytes) for trip %s", unique_filename, len(content), trip_id)

    return {
        "url": f"/files/photos/{unique_filename}",
        "filename": unique_filename,
        "original_filename": file.filename,
        "content_type": content_type,
        "size": len(content),
    }


@router.get("/photos/{filename}")
async def get_photo(filename: str):
    file_path = photo_path(filename)

    if not file_path.exists():
        raise HTTPException(status_code=404, detail="File not found")

    content_type = EXTENSION_TYPES.get(file_path.suffix.lower(), "application/octet-stream")

    return FileResponse(
        file_path,
        media_type=content_type,
        filename=filename
    )


@router.delete("/photos/{filename}")
async def delete_photo(filename: str):
    """
    Delete a stored photo. Only removes the file; moments pointing at it
    keep their photo_ref.
    """
    file_path = photo_path(filename)

    if not file_path.exists():
        raise HTTPException(status_code=404, detail="File not found")

    try:
        os.remove(file_path)
    except OSError as e:
        logger.error("Could not delete photo %s: %s", filename, e)
        raise HTTPException(status_code=500, detail=f"Could not delete file: {str(e)}")

    return {"message": "File deleted"}
