"""Exceptions raised while building feature graphs"""


class FeatureGraphError(RuntimeError):
    """Base exception for feature graph failures"""


class ConfigurationError(FeatureGraphError):
    """Raised when the configuration file or one of its options is invalid"""


class TableShapeError(FeatureGraphError):
    """Raised when an examples table is not rectangular"""

    def __init__(self, file: str, line: int, expected: int, actual: int):
        self.file = file
        self.line = line
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{file}:{line}: examples row has {actual} cells, header has {expected}"
        )
