from __future__ import annotations


class UsbKitError(Exception):
    """
    usbkit base error.

    Carries a short machine code so callers can branch without parsing text.
    """
    def __init__(self, code: str, hint: str = "", recoverable: bool = False) -> None:
        super().__init__(f"{code}: {hint}" if hint else code)
        self.code = code
        self.hint = hint
        self.recoverable = recoverable


class ExtractionError(UsbKitError):
    """A JSON inventory did not have the shape the extractor relies on."""

    def __init__(self, code: str, path: str, hint: str = "") -> None:
        super().__init__(code, hint)
        self.path = path


class ShapeError(ExtractionError):
    def __init__(self, path: str, expected: str, actual: str) -> None:
        super().__init__("SHAPE_MISMATCH", path, f"{path}: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class IntegerParseError(ExtractionError):
    def __init__(self, path: str, field: str, raw: str) -> None:
        super().__init__("BAD_INTEGER", path, f"{path}: cannot parse {raw!r} as an integer")
        self.field = field
        self.raw = raw


class DepthLimitError(ExtractionError):
    def __init__(self, path: str, limit: int) -> None:
        super().__init__("DEPTH_EXCEEDED", path, f"{path}: nesting deeper than {limit}")
        self.limit = limit
