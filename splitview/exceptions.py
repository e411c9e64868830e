"""Custom exception hierarchy for splitview.

Layout operations never raise: a stale id, a refused insert or a drop
outside the layout all come back as a no-op result. Exceptions are reserved
for bad configuration.

Exception Hierarchy:
    SplitViewError (base)
    └── ConfigurationError - settings/configuration issues

Usage:
    from splitview.exceptions import ConfigurationError

    try:
        settings = load_settings(path)
    except yaml.YAMLError as e:
        raise ConfigurationError("Config file is not valid YAML", path=str(path)) from e
"""

from typing import Any, Optional


class SplitViewError(Exception):
    """Base exception for all splitview errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., ids, paths)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SplitViewError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
