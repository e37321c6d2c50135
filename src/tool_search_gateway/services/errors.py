"""Error taxonomy for the tool search subsystem."""

from typing import Any, Dict, Optional


class ToolSearchError(Exception):
    """Base exception class for tool search errors."""
    def __init__(self, message: str, error_code: str = "TOOL_SEARCH_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ToolSearchError):
    """Exception for unknown presets, providers and similar setup mistakes."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIG_ERROR", details)


class ModelDownloadError(ToolSearchError):
    """Exception for failed embedding archive downloads."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: str = "TRANSPORT_ERROR"):
        super().__init__(message, error_code, details)


class DownloadCancelledError(ModelDownloadError):
    """Exception raised when the caller cancels a download in progress."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, "DOWNLOAD_CANCELLED")


class ArchiveError(ToolSearchError):
    """Exception for archives that are corrupt or lack the expected member."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "ARCHIVE_ERROR", details)


class IndexBuildError(ToolSearchError):
    """Exception for failures while building a search index."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INDEX_BUILD_ERROR", details)


class RankerError(ToolSearchError):
    """Exception for external ranking collaborator failures."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "RANKER_ERROR", details)


class SearchError(ToolSearchError):
    """Exception for a search call that could not be answered."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "SEARCH_ERROR", details)
