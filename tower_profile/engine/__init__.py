from .engine import ProfileEngine, build_profile
from .models import ProfileResult, ReferenceDataError, SelectionSet

__all__ = ["ProfileEngine", "build_profile", "ProfileResult", "ReferenceDataError", "SelectionSet"]
