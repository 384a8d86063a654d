"""Gallery services: integrity checks, status, rankings and the facade."""

from .gallery import GalleryService, build_gallery_service_from_env
from .integrity import ReferentialIntegrityGuard
from .ranking import compute_rankings
from .status import derive_status

__all__ = [
    "GalleryService",
    "build_gallery_service_from_env",
    "ReferentialIntegrityGuard",
    "compute_rankings",
    "derive_status",
]
