from typing import List

from fastapi import APIRouter, Depends, HTTPException

from leakscan.deps import get_llm, get_storage
from leakscan.schemas import AnalysisResult, AnalysisRun
from leakscan.services.analysis_service import AnalysisService
from leakscan.utils.logs import log

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post("/analysis/start", response_model=AnalysisRun)
async def start_analysis(storage=Depends(get_storage), llm=Depends(get_llm)):
    try:
        results = await AnalysisService(storage, llm).run()
    except Exception as e:
        log("Analysis error:", e)
        raise HTTPException(status_code=500, detail="Failed to analyze data") from e
    return AnalysisRun(success=True, results=results)


@router.get("/analysis/results", response_model=List[AnalysisResult])
async def list_results(storage=Depends(get_storage)):
    return storage.get_analysis_results()
