from fastapi import APIRouter, Depends

from ..application.services.clinical_text_service import ClinicalTextService
from ..dependencies import get_text_service
from ..schemas.notes.notes import RefineNotesRequest, TextResponse

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.post("/refine", response_model=TextResponse)
def refine_notes(payload: RefineNotesRequest, text: ClinicalTextService = Depends(get_text_service)):
    return TextResponse(text=text.refine_notes(payload.notes, payload.patient_name))


@router.get("/insight", response_model=TextResponse)
def daily_insight(text: ClinicalTextService = Depends(get_text_service)):
    return TextResponse(text=text.daily_insight())
