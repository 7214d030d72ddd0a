class CommitteeReadError(Exception):
    """A read that gates the rest of a pipeline failed."""
