import os
from abc import ABC, abstractmethod
from typing import List, Optional, Union
from patternscan.search.exceptions import InvalidInputError


class SearchAlgorithm(ABC):
    """
    SearchAlgorithm Abstract Base Class

    This abstract base class defines the interface for exact pattern search engines
    working over the full contents of a file. It provides a common structure and API
    so that the benchmark driver can time any engine the same way.

    The file is read as raw bytes and treated as a single text; matching is by byte
    value. Queries given as `str` are encoded as UTF-8 before searching.

    Args:
        file_path (str): Path to the file to be searched
        reread_on_query (bool): Whether to reread the file (and rebuild the index)
            before each query

    Attributes:
        file_path (str): Path to the file that will be searched
        reread_on_query (bool): Flag indicating whether to reread the file on each query
        _text (bytes): Contents of the file as last read

    Abstract Methods:
        _build_index():
            Builds the engine-specific structure over `_text`.

        search(query):
            Returns the ascending zero-based offsets at which `query` occurs.

        get_stats():
            Returns statistics about the last search operation.

    Methods:
        count(query):
            Number of occurrences of `query`.

        size_in_bytes():
            Size of the in-memory index, or None when the engine keeps none.
    """
    def __init__(self, file_path: str, reread_on_query: bool = False) -> None:
        self.file_path = file_path
        self.reread_on_query = reread_on_query
        self._last_modified: float = 0.0
        self._text: bytes = b""
        self._loaded = False

    @abstractmethod
    def _build_index(self) -> None:
        pass

    @abstractmethod
    def search(self, query: Union[str, bytes]) -> List[int]:
        pass

    @abstractmethod
    def get_stats(self) -> dict:
        pass

    def count(self, query: Union[str, bytes]) -> int:
        return len(self.search(query))

    def size_in_bytes(self) -> Optional[int]:
        return None

    @property
    def text(self) -> bytes:
        return self._text

    def _prepare(self, query: Union[str, bytes]) -> bytes:
        """
        Validate and encode a query, reloading the file first if required.

        Raises:
            InvalidInputError: If the query is empty.
        """
        if isinstance(query, str):
            query = query.encode("utf-8")
        if not query:
            raise InvalidInputError("Query must not be empty")
        if self.reread_on_query or not self._loaded:
            self.load()
        return bytes(query)

    def load(self) -> None:
        """Read the file and rebuild the index if the file changed."""
        if self._read_file():
            self._build_index()

    def _read_file(self) -> bool:
        """
        Read the file and load its content into memory.

        Returns:
            bool: True if the content was (re)loaded, False if the cached content
            is still current.
        """
        try:
            current_mtime = os.path.getmtime(self.file_path)
            if self._loaded and current_mtime <= self._last_modified:
                # File hasn't changed, no need to reload
                return False
            self._last_modified = current_mtime
        except OSError:
            # Will be handled in the file opening block
            pass

        try:
            with open(self.file_path, 'rb') as file:
                self._text = file.read()
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {self.file_path}")
        except OSError as e:
            raise RuntimeError(f"Error reading file: {e}") from e
        self._loaded = True
        return True
