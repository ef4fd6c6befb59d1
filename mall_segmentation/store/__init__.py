from .memory_store import CustomerStore, matches

__all__ = ["CustomerStore", "matches"]
