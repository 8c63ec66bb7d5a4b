"""
Infrastructure layer - Adapters and cross-cutting concerns for StakeVote.

This layer contains:
- adapters/: production implementations of application ports
- stubs/: in-memory implementations for development and testing
- observability/: structlog configuration
"""
