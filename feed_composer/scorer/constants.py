"""Constants for the scorer module."""

# Subtracted from the score of items whose domain was visited recently.
RECENT_DOMAIN_PENALTY: float = 5.0

# Number of recent history entries consulted for domain signals.
DEFAULT_HISTORY_LIMIT: int = 200

# Second-level labels under which registrations happen one level deeper
# (e.g. bbc.co.uk rather than co.uk).
MULTI_PART_SUFFIXES: frozenset[str] = frozenset(
    {
        "ac",
        "co",
        "com",
        "edu",
        "gov",
        "ne",
        "net",
        "or",
        "org",
    }
)
