from typing import List, Optional, Protocol

from ..entities import Patient


class PatientsRepository(Protocol):
    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        ...

    def list_all(self) -> List[Patient]:
        ...

    def add(self, patient: Patient) -> None:
        ...

    def update(self, patient: Patient) -> None:
        ...

    def delete(self, patient_id: str) -> bool:
        ...
