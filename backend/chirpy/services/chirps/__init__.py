from .service import ChirpService

__all__ = ["ChirpService"]
