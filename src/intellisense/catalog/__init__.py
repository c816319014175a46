from .api import CandidateProvider, make_provider
from .loader import load_catalog
from .memory_provider import ANY, MemoryProvider

__all__ = ["ANY", "CandidateProvider", "MemoryProvider", "load_catalog", "make_provider"]
