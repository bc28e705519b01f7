"""
Application layer - use cases and orchestration for votecast.

This layer contains:
- Service orchestration (casting, tabulation, lifecycle, tie resolution)
- Port definitions (interfaces for stores, observers and the clock)
- Request DTOs

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, bootstrap, config, workers
"""
