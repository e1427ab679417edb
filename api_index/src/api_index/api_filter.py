# --- Which methods count as API ----------------------------------------------
from typing import Protocol, Sequence

from api_index.src.api_index.models.ast_models import Annotation


class ApiSurfaceFilter(Protocol):
    def __call__(self, annotations: Sequence[Annotation]) -> bool:
        ...


class AnnotationSubstringFilter:
    """
    Keeps a method when any of its own annotations has `marker` somewhere in its
    name. With the default marker that covers @GetMapping, @PostMapping,
    @RequestMapping and friends without listing them. Matching is
    case-sensitive; an unannotated method is never kept.
    """

    def __init__(self, marker: str = "Mapping"):
        self.marker = marker

    def __call__(self, annotations: Sequence[Annotation]) -> bool:
        return any(self.marker in annotation.name for annotation in annotations)

    def __repr__(self) -> str:
        return f"AnnotationSubstringFilter(marker={self.marker!r})"


is_api_method = AnnotationSubstringFilter()
