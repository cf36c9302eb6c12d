from fastapi import APIRouter, Depends, HTTPException

from leakscan.deps import get_storage
from leakscan.schemas import DemoRequest, UploadedFile
from leakscan.services.file_intake import FileIntakeService, UnknownDemoType
from leakscan.utils.logs import log

router = APIRouter(prefix="/api", tags=["demo"])


@router.post("/demo/load", response_model=UploadedFile)
async def load_demo(body: DemoRequest, storage=Depends(get_storage)):
    try:
        return FileIntakeService(storage).load_demo(body.type)
    except UnknownDemoType:
        raise HTTPException(status_code=400, detail="Invalid demo type")
    except Exception as e:
        log("Demo load error:", e)
        raise HTTPException(status_code=500, detail="Failed to load demo data") from e
