class BiMultiMapError(Exception):
    pass


class InvalidCapacityError(BiMultiMapError, ValueError):
    def __init__(self, rows: object, cols: object) -> None:
        super().__init__(f"grid dimensions must be positive integers, got rows={rows!r} cols={cols!r}")
        self.rows = rows
        self.cols = cols


class ConcurrentModificationError(BiMultiMapError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("BiMultiMap changed during iteration")


class ConfigurationError(BiMultiMapError):
    pass
