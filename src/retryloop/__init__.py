"""
retryloop: bounded, observable retries for fallible operations.

Invokes an operation until it succeeds, a maximum number of attempts is
used up, or a wall-clock timeout elapses, and reports exactly one outcome.
Meant to be embedded in network clients and job runners.

Architecture: asyncio retry engine + functional options + structlog logging
+ Prometheus metrics
"""

__version__ = "0.1.0"
