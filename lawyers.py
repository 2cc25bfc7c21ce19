from typing import Iterable, List, Optional

from errors import NotFoundError
from schemas import Lawyer


def _has(values: Iterable[str], wanted: str) -> bool:
    wanted = wanted.strip().lower()
    return any(v.lower() == wanted for v in values)


class LawyerDirectory:
    def __init__(self, lawyers: Iterable[Lawyer] = ()):
        self._lawyers: List[Lawyer] = list(lawyers)

    def list_lawyers(self, practice_area: Optional[str] = None, service_type: Optional[str] = None,
                     city: Optional[str] = None, language: Optional[str] = None,
                     search: Optional[str] = None) -> List[Lawyer]:
        items = self._lawyers
        if practice_area:
            items = [l for l in items if _has(l.practice_areas, practice_area)]
        if service_type:
            items = [l for l in items if _has(l.service_types, service_type)]
        if city:
            items = [l for l in items if l.office_address and _has([l.office_address.city], city)]
        if language:
            items = [l for l in items if _has(l.languages, language)]
        term = (search or "").strip().lower()
        if term:
            items = [
                l for l in items
                if term in l.name.lower() or any(term in a.lower() for a in l.practice_areas)
            ]
        return list(items)

    def get_lawyer(self, lawyer_id: str) -> Lawyer:
        for lawyer in self._lawyers:
            if lawyer.id == lawyer_id:
                return lawyer
        raise NotFoundError("Lawyer not found")
