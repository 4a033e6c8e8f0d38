"""
Directory Service Module
Read-only counterparty lists used to populate the wizard's choice controls
"""

from typing import Dict, List, Mapping, Optional, Sequence

from ..models.transaction import SourceType

DEFAULT_COUNTERPARTIES: Dict[SourceType, List[str]] = {
    SourceType.FARMER: ["Sunil Mahto", "Ramesh Mahto", "Sita Devi", "Manoj Paswan"],
    SourceType.VENDOR: ["Bihar Fresh Mart", "Metro Institutional"],
    SourceType.AGGREGATOR: ["Danapur Collection Point", "Gaya Farmer Producer Co."],
    SourceType.UNION: ["Patna District Union", "Gaya District Union"],
}

DEFAULT_LOCATIONS = ["Patna Central PVCS", "Danapur Local Node", "Gaya Regional Hub"]


class DirectoryService:
    """Lookup of eligible counterparties per source type"""

    def __init__(
        self,
        counterparties: Optional[Mapping[SourceType, Sequence[str]]] = None,
        locations: Optional[Sequence[str]] = None
    ):
        source = DEFAULT_COUNTERPARTIES if counterparties is None else counterparties
        self._counterparties = {SourceType(key): list(names) for key, names in source.items()}
        self._locations = list(DEFAULT_LOCATIONS if locations is None else locations)

    def counterparties(self, source_type: SourceType, search: Optional[str] = None) -> List[str]:
        names = self._counterparties.get(source_type, [])
        if search:
            needle = search.lower()
            names = [name for name in names if needle in name.lower()]
        return list(names)

    def locations(self) -> List[str]:
        return list(self._locations)
