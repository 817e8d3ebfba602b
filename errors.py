"""Error types shared by the strategies, the optimizer and the registry."""


class BanditError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgument(BanditError, ValueError):
    """Bad construction parameter, unsupported kind or out-of-range arm."""


class NotFound(BanditError, KeyError):
    """Operation referenced an id the registry never issued (or removed)."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""
