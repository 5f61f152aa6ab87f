"""Exception hierarchy for the fuzzy cache.

Only engine-level problems live here. Failures raised by a wrapped
computation are never wrapped in these types: they are cached and replayed
exactly as the computation raised them.
"""


class FuzzyCacheError(Exception):
    """Base class for errors raised by the cache itself."""


class CacheConfigError(FuzzyCacheError):
    """A caching configuration violates its contract (e.g. non-positive TTL).

    Raised on every call to a wrapper built from the bad configuration.
    """


class EmbeddingProviderError(FuzzyCacheError):
    """A bundled embedding provider could not produce a vector."""
