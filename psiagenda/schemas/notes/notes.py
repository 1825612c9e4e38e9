# psiagenda/schemas/notes/notes.py
from pydantic import BaseModel

class RefineNotesRequest(BaseModel):
    notes: str
    patient_name: str = ""

class TextResponse(BaseModel):
    text: str
