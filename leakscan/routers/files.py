from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from leakscan import settings
from leakscan.deps import get_storage
from leakscan.schemas import FILE_TYPES, UploadedFile
from leakscan.services.file_intake import FileIntakeService, validate_file_type
from leakscan.utils.logs import log

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/files/upload", response_model=UploadedFile)
async def upload_file(
    file: Optional[UploadFile] = File(default=None),
    file_type: Optional[str] = Form(default=None, alias="type"),
    storage=Depends(get_storage),
):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")
    if file_type not in FILE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid file type")
    if not validate_file_type(file.filename, file_type):
        raise HTTPException(status_code=400, detail="Invalid file format for type")

    raw = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        return FileIntakeService(storage).save_upload(file.filename, file_type, raw)
    except Exception as e:
        log("Upload error:", e)
        raise HTTPException(status_code=500, detail="Failed to upload file") from e


@router.get("/files", response_model=List[UploadedFile])
async def list_files(storage=Depends(get_storage)):
    return storage.get_files()
