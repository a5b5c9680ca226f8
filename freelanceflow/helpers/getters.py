from freelanceflow.core.config import settings


def isDebugMode() -> bool:
    """True everywhere except production."""
    return settings.MODE != "production"
