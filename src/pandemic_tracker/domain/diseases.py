"""Disease category metadata."""

from __future__ import annotations

from collections.abc import Iterable

from .enums import DiseaseType
from .errors import UnknownDiseaseError
from .models import DiseaseData

DEFAULT_DISEASES: tuple[DiseaseData, ...] = (
    DiseaseData(type=DiseaseType.YELLOW, display_name="Yellow", color="yellow"),
    DiseaseData(type=DiseaseType.RED, display_name="Red", color="red"),
    DiseaseData(type=DiseaseType.BLACK, display_name="Black", color="white"),
    DiseaseData(type=DiseaseType.BLUE, display_name="Blue", color="blue"),
    DiseaseData(type=DiseaseType.FADED, display_name="Faded", color="magenta"),
)


def get_disease_data(diseases: Iterable[DiseaseData], disease: DiseaseType | str) -> DiseaseData:
    """Return the metadata entry for ``disease``."""

    for data in diseases:
        if data.type == disease:
            return data
    raise UnknownDiseaseError(f"No disease identified by {disease}")
