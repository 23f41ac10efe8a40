# coursefinder/common/app_state.py

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import Request

from coursefinder.models.models import UniversityType
from coursefinder.modules.courses.catalog_source import load_snapshot
from coursefinder.modules.courses.schemas import NormalizationOptions

@dataclass
class AppState:
    """
    Application-wide state built once by the composition root (main.py) and
    stored on ``app.state.core``. Routes reach it through `get_app_state`.
    """
    normalization_options: NormalizationOptions
    catalog_strict: bool = True
    bookmark_conflict_retries: int = 1
    catalog_snapshot: Optional[List[Dict[str, Any]]] = None

    @classmethod
    def from_settings(cls, settings) -> "AppState":
        snapshot = load_snapshot(settings.CATALOG_SNAPSHOT_PATH) if settings.CATALOG_SNAPSHOT_PATH else None
        return cls(
            normalization_options=NormalizationOptions(
                default_university_type=UniversityType(settings.DEFAULT_UNIVERSITY_TYPE),
                allow_placeholder_university=settings.ALLOW_PLACEHOLDER_UNIVERSITY,
            ),
            catalog_strict=settings.CATALOG_STRICT,
            bookmark_conflict_retries=settings.BOOKMARK_CONFLICT_RETRIES,
            catalog_snapshot=snapshot,
        )

def get_app_state(request: Request) -> AppState:
    return request.app.state.core
