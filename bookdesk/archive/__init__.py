from .service import ArchiveService

__all__ = ["ArchiveService"]
