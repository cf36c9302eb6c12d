from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from leakscan.deps import get_llm, get_storage
from leakscan.schemas import Proposal, ProposalRequest
from leakscan.services.proposal_service import ProposalService
from leakscan.utils.logs import log

router = APIRouter(prefix="/api", tags=["proposal"])


@router.post("/proposal/generate", response_model=Proposal)
async def generate_proposal(
    body: Optional[ProposalRequest] = Body(default=None),
    storage=Depends(get_storage),
    llm=Depends(get_llm),
):
    client_name = body.client_name if body else None
    try:
        return await ProposalService(storage, llm).generate(client_name)
    except Exception as e:
        log("Proposal generation error:", e)
        raise HTTPException(status_code=500, detail="Failed to generate proposal") from e


@router.get("/proposal/latest", response_model=Optional[Proposal])
async def latest_proposal(storage=Depends(get_storage)):
    return storage.get_latest_proposal()


@router.get("/proposals", response_model=List[Proposal])
async def list_proposals(storage=Depends(get_storage)):
    return storage.get_proposals()
