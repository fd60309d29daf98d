class SearchError(Exception):
    """Base exception for search-related errors."""
    pass


class InvalidInputError(SearchError, ValueError):
    """Raised when a hasher or a search receives an empty or mistyped input."""
    pass


class IndexOutOfRangeError(SearchError, IndexError):
    """Raised when a substring query falls outside the hashed sequence."""
    pass
