from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import logging
import random

from ..ports.ai_provider import AIProvider

logger = logging.getLogger(__name__)

INSIGHT_FALLBACK = "O inconsciente é estruturado como uma linguagem."
REPORT_FALLBACK = "Não foi possível gerar o relatório no momento."

INSIGHT_KINDS = {
    "book_recommendation": (
        "Recommend one essential book or seminar by Lacan or a well-known commentator "
        "(Fink, Miller, Dunker). Give the title and one sentence on why a clinician should read it today."
    ),
    "concept_explanation": (
        "Pick one Lacanian concept (objet a, jouissance, Name-of-the-Father, the Real, sinthome...) "
        "and explain it in at most two terse, evocative sentences."
    ),
    "famous_quote": (
        "Quote Jacques Lacan directly, then add one line on how it applies in the clinic."
    ),
    "video_search_suggestion": (
        "Suggest a video study topic as a search phrase (for example 'Lacan Televisão 1973') "
        "and say what the clinician will learn from it."
    ),
}

SessionNote = Tuple[str, str]  # (formatted date, notes)


def _sessions_block(sessions: Sequence[SessionNote], label: str) -> str:
    return "\n\n".join(f"- Data: {day}\n  {label}: {notes}" for day, notes in sessions)


@dataclass
class ClinicalTextService:
    """Best-effort text generation for notes, the insight card and reports.

    Nothing here raises: provider errors, empty answers and a missing
    provider all degrade to the input text or a fixed placeholder.
    """
    provider: Optional[AIProvider]
    practitioner_name: str = "Arthur Castilho"
    practitioner_registration: str = "CRP 01/24909"
    notes_model: Optional[str] = None
    report_model: Optional[str] = None
    rng: random.Random = field(default_factory=random.Random)

    def refine_notes(self, raw_notes: str, patient_name: str) -> str:
        if not raw_notes or not raw_notes.strip():
            return raw_notes
        prompt = f"""
        You assist the psychologist {self.practitioner_name}.
        Rewrite the clinical notes below so they read professional, concise and clear,
        keeping an appropriate clinical tone. Use bullet points where they help.
        Answer in Brazilian Portuguese and return only the rewritten text.

        Patient: {patient_name}
        Raw notes: "{raw_notes}"
        """
        return self._generate(prompt, self.notes_model, fallback=raw_notes, purpose="note refinement")

    def daily_insight(self) -> str:
        kind = self.rng.choice(list(INSIGHT_KINDS))
        prompt = f"""
        Write a short, rich and surprising piece for a daily insight card in the app of
        the psychologist {self.practitioner_name}.
        Content type: {kind}.
        Instruction: {INSIGHT_KINDS[kind]}
        Keep an erudite, psychoanalytic but inspiring tone, in Brazilian Portuguese.
        Stay under 200 characters.
        """
        return self._generate(prompt, self.report_model, fallback=INSIGHT_FALLBACK, purpose="insight")

    def technical_report(self, patient_name: str, sessions: Sequence[SessionNote]) -> str:
        signature = f"{self.practitioner_name} - Psicólogo | {self.practitioner_registration}"
        prompt = f"""
        Act as the psychologist {self.practitioner_name} ({self.practitioner_registration}) writing a formal
        psychological report / clinical evolution about the patient "{patient_name}".
        The reader may be a psychiatrist, a neurologist or the official record.

        Tone: technical, objective, impersonal (third person), in Brazilian Portuguese.

        Sections:
        1. Identification and summary of the complaint
        2. Summary of the clinical evolution, from the earliest session to the latest
        3. Diagnostic impressions and analysis
        4. Conclusion and plan

        End with the signature line: "{signature}"

        Session records, most recent first:
        {_sessions_block(sessions, "Evolução")}

        Format the answer as clean Markdown.
        """
        return self._generate(prompt, self.report_model, fallback=REPORT_FALLBACK, purpose="technical report")

    def supervision_report(self, patient_name: str, sessions: Sequence[SessionNote]) -> str:
        prompt = f"""
        Act as a senior psychoanalytic clinical supervisor (Lacanian/Freudian orientation)
        supervising the case of "{patient_name}", seen by the psychologist {self.practitioner_name}.
        Give the therapist insights, guidance and questions, in Brazilian Portuguese.

        Sections:
        1. What is being heard: desire, jouissance, what repeats in the patient's speech
        2. Handling of the transference
        3. Points of resistance
        4. Direction of the treatment: suggested interventions, cuts, punctuations

        Session records, most recent first:
        {_sessions_block(sessions, "Anotação")}

        Be theoretically deep but practical. Format the answer as Markdown.
        """
        return self._generate(prompt, self.report_model, fallback=REPORT_FALLBACK, purpose="supervision report")

    def _generate(self, prompt: str, model: Optional[str], fallback: str, purpose: str) -> str:
        if self.provider is None:
            logger.warning(f"AI provider not configured, using fallback for {purpose}")
            return fallback
        try:
            text = self.provider.generate_text(prompt, model=model)
        except Exception as e:
            logger.error(f"Error generating {purpose}: {e}")
            return fallback
        text = (text or "").strip()
        return text or fallback


def format_sessions(rows: List[Tuple]) -> List[SessionNote]:
    """(date, notes) pairs with dates rendered dd/mm/YYYY."""
    return [(d.strftime("%d/%m/%Y"), notes) for d, notes in rows]
