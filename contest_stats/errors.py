"""Error types shared by the loaders, the allocator and the pipeline.

Row-level problems (`RowParseError`) are caught where the row is read and the
row is dropped. Everything derived from `PreconditionViolation` aborts the run.
"""


class RowParseError(ValueError):
    """A dataset row (or one of its fields) does not have the expected shape."""


class PreconditionViolation(RuntimeError):
    """The dataset breaks an assumption the monthly aggregation relies on."""


class UnknownContestError(PreconditionViolation):
    def __init__(self, contest_id: str):
        super().__init__(f"Finding references unknown contest id: {contest_id!r}")
        self.contest_id = contest_id
