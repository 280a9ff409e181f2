"""File-backed access to the CSL style directories."""
import asyncio
import os
from typing import List, Optional

from common.config import Config
from common.errors import FileReadError, RegistryLoadError
from common.logging import logger


class StyleStore:
    """Enumerates and reads ``<short_name>.csl`` files.

    Independent styles live directly under ``independent_path``; dependent
    styles live under ``dependent_path`` (conventionally its ``dependent/``
    subdirectory).
    """

    def __init__(self, independent_path: Optional[str] = None, dependent_path: Optional[str] = None,
                 extension: str = Config.CSL_EXTENSION):
        self.independent_path = independent_path or Config.CSL_PATH
        self.dependent_path = dependent_path or (
            os.path.join(independent_path, "dependent") if independent_path else Config.CSL_DEPENDENT_PATH)
        self.extension = extension

    def _list_names(self, directory: str) -> List[str]:
        try:
            filenames = os.listdir(directory)
        except OSError as e:
            raise RegistryLoadError(f"Cannot list style directory {directory}: {e}", cause=e) from e
        return [f[:-len(self.extension)] for f in filenames
                if f.endswith(self.extension) and len(f) > len(self.extension)]

    def list_independent(self) -> List[str]:
        return self._list_names(self.independent_path)

    def list_dependent(self) -> List[str]:
        return self._list_names(self.dependent_path)

    def independent_file(self, short_name: str) -> str:
        return os.path.join(self.independent_path, short_name + self.extension)

    def dependent_file(self, short_name: str) -> str:
        return os.path.join(self.dependent_path, short_name + self.extension)

    @staticmethod
    def _read_text(filename: str) -> str:
        # Bytes then decode, so line endings come back exactly as stored
        with open(filename, "rb") as f:
            return f.read().decode("utf-8")

    async def _read(self, filename: str) -> str:
        logger.debug(f"Reading style file {filename}")
        try:
            return await asyncio.to_thread(self._read_text, filename)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error loading style from file {filename}: {e}")
            raise FileReadError(f"Error loading style from file {filename}: {e}", cause=e) from e

    async def read_independent(self, short_name: str) -> str:
        return await self._read(self.independent_file(short_name))

    async def read_dependent(self, short_name: str) -> str:
        return await self._read(self.dependent_file(short_name))
