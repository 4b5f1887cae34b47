"""
Domain errors

Every failure the converter reports on purpose derives from ConverterError,
so callers can catch one type and decide how to surface it.
"""

from typing import Optional


class ConverterError(Exception):
    """Base class for domain-specific errors"""
    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DimensionMismatchError(ConverterError):
    """A frame in a batch does not match the first frame's dimensions"""
    def __init__(self, frame_number: int, width: int, height: int, expected_width: int, expected_height: int):
        super().__init__(
            code="DIMENSION_MISMATCH",
            message=(
                f"Frame {frame_number} dimensions ({width}x{height}) "
                f"don't match first frame ({expected_width}x{expected_height})"
            ),
            details={
                "frame_number": frame_number,
                "size": (width, height),
                "expected_size": (expected_width, expected_height),
            },
        )


class MissingSourceDataError(ConverterError):
    """An operation needs frames (or an image) that were never supplied"""
    def __init__(self, message: str = "No frames loaded"):
        super().__init__(code="MISSING_SOURCE_DATA", message=message)


class InvalidModeError(ConverterError):
    """Resize mode or loop discipline is not supported"""
    def __init__(self, kind: str, value: str, valid_values: list):
        super().__init__(
            code="INVALID_MODE",
            message=f"{kind} '{value}' is not supported",
            details={"value": value, "valid_values": valid_values},
        )


class OutputSizeMismatchError(ConverterError):
    """Explicit output width/height disagree with the frames being exported"""
    def __init__(self, width: int, height: int, frame_width: int, frame_height: int):
        super().__init__(
            code="OUTPUT_SIZE_MISMATCH",
            message=(
                f"Output size ({width}x{height}) doesn't match "
                f"frame size ({frame_width}x{frame_height})"
            ),
            details={"size": (width, height), "frame_size": (frame_width, frame_height)},
        )
