from .db_store import DBStore
from .file_store import FileStore
from .paths import StoragePaths
from .store import SessionStore

__all__ = ["DBStore", "FileStore", "SessionStore", "StoragePaths"]
