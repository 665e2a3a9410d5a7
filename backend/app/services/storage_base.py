"""
ButtonUp Backend — Abstract Storage Gateway
=============================================

What:  Contract for the object-storage bucket behind /api/files.
Why:   Routes depend on this interface, not on the Supabase SDK. Tests swap in
       an in-memory fake through FastAPI's dependency overrides.
How:   SupabaseStorageGateway (supabase_storage.py) is the production implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class StorageGateway(ABC):
    """
    Contract:
        - Each operation performs at most one remote call
        - Remote failures are raised as StorageError (never SDK exceptions)
        - get_file_url() is pure: no I/O, never raises
    """

    @abstractmethod
    async def list_files(self) -> List[Dict[str, Any]]:
        """
        List objects at the bucket root, newest first.

        Returns:
            Raw object records as returned by the backend. Each has at least
            a non-empty `name`. No pagination: one page of up to 100 entries.

        Raises:
            StorageError: remote call failed or storage is not configured.
        """
        ...

    @abstractmethod
    def get_file_url(self, name: str) -> str:
        """Derive the public URL of an object from its name."""
        ...

    @abstractmethod
    async def delete_file(self, name: str) -> None:
        """
        Delete one object.

        Raises:
            StorageObjectNotFoundError: nothing named `name` was removed.
            StorageError: remote call failed or storage is not configured.
        """
        ...

    @abstractmethod
    async def upload_file(
        self, name: str, content: bytes, content_type: str
    ) -> Dict[str, str]:
        """
        Store `content` under `name` without overwriting.

        Returns:
            {"path", "fullPath", "publicUrl"} for the stored object.

        Raises:
            StorageError: remote call failed (including name already taken).
        """
        ...
