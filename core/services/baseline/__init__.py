from core.services.baseline.service import BaselineService

__all__ = ["BaselineService"]
