"""Store-level conflict errors raised by repository adapters.

Adapters raise DuplicateRecordError when a uniqueness constraint rejects a
write. Services translate it into the matching domain error
(AlreadyVotedError, TieAlreadyResolvedError); it never leaves the core.
"""

from __future__ import annotations

from votecast.domain.exceptions import VotecastError


class DuplicateRecordError(VotecastError):
    """Raised by a repository when a uniqueness constraint is violated.

    Attributes:
        record_type: Logical name of the record (e.g. "voter_eligibility").
        key: The conflicting key values.
    """

    def __init__(self, record_type: str, key: tuple[object, ...]) -> None:
        self.record_type = record_type
        self.key = key
        super().__init__(
            f"Duplicate {record_type} record for key "
            f"({', '.join(str(k) for k in key)})"
        )
