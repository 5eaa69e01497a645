"""
Custom Exception Classes for confstore

Hierarchical exception structure shared by every store implementation.
Lookup errors (NotFoundError, ParseError) reach getter callers; refresh
errors (RetrievalError, DecodeError) reach whoever drives load_config.
"""


class ConfigStoreError(Exception):
    """Base exception for all confstore errors"""

    def __init__(self, message: str, recoverable: bool = True):
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


class LookupFailedError(ConfigStoreError):
    """A typed getter could not produce a value"""

    def __init__(self, message: str, key: str):
        self.key = key
        super().__init__(message, recoverable=True)


class NotFoundError(LookupFailedError):
    """Key absent from the current snapshot"""

    def __init__(self, key: str):
        super().__init__(f"key {key!r} not found", key)


class ParseError(LookupFailedError):
    """Value present but not valid text for the requested type"""

    def __init__(self, key: str, value: object, target: str):
        self.value = value
        self.target = target
        super().__init__(f"key {key!r}: {value!r} is not a valid {target}", key)


class RefreshError(ConfigStoreError):
    """A refresh cycle failed; the previous snapshot is still live"""

    def __init__(self, message: str, namespace: str):
        self.namespace = namespace
        super().__init__(f"Refresh [{namespace}]: {message}", recoverable=True)


class RetrievalError(RefreshError):
    """Remote fetch failed (connectivity, timeout, missing namespace key)"""


class DecodeError(RefreshError):
    """Remote payload is not a structured key/value document"""


class ConstructionError(ConfigStoreError):
    """Remote store unreachable while building a store"""

    def __init__(self, message: str):
        super().__init__(f"Construction failed: {message}", recoverable=False)


class StoreStateError(ConfigStoreError):
    """Lifecycle misuse, e.g. restarting a stopped refresh loop"""

    def __init__(self, message: str):
        super().__init__(message, recoverable=False)
