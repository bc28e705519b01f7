"""
Infrastructure layer - adapters for votecast.

This layer contains:
- In-memory stubs for every application port
- SQLAlchemy persistence adapters
- The system clock adapter
- Structured logging and correlation IDs

IMPORT RULES:
- CAN import from: application, domain
- CANNOT import from: bootstrap, workers
"""
