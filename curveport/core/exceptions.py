"""
Exception hierarchy for curveport.

Every error carries a human readable message plus a ``details`` dict so
callers can report which property, time or kind was involved without
parsing strings.
"""

from typing import Any, Dict, Optional


class CurveportException(Exception):
    """Base exception for all curveport errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ParameterError(CurveportException):
    """Invalid parameter or configuration value."""

    def __init__(self, message: str, parameter_name=None, parameter_value=None, **kwargs):
        details = kwargs.copy()
        if parameter_name is not None:
            details["parameter"] = parameter_name
        if parameter_value is not None:
            details["value"] = parameter_value
        super().__init__(message, details)


class InputShapeError(CurveportException):
    """Property has too few keyframes for curve reconstruction.

    Callers should route such properties to the sampler instead.
    """

    def __init__(self, message: str, keyframe_count=None, **kwargs):
        details = kwargs.copy()
        if keyframe_count is not None:
            details["keyframe_count"] = keyframe_count
        super().__init__(message, details)


class AccessorFailure(CurveportException):
    """The property accessor failed to report a value or keyframe attribute."""

    def __init__(self, message: str, time=None, property_name=None, **kwargs):
        details = kwargs.copy()
        if time is not None:
            details["time"] = time
        if property_name:
            details["property"] = property_name
        super().__init__(message, details)


class RemapError(CurveportException):
    """No remap rule is registered for a property kind."""

    def __init__(self, message: str, kind=None, destination=None, **kwargs):
        details = kwargs.copy()
        if kind is not None:
            details["kind"] = kind
        if destination:
            details["destination"] = destination
        super().__init__(message, details)


__all__ = [
    "CurveportException",
    "ParameterError",
    "InputShapeError",
    "AccessorFailure",
    "RemapError",
]
