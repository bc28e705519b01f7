"""Background workers for votecast."""
