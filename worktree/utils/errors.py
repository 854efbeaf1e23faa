# worktree/utils/errors.py
class WorkTreeError(RuntimeError):
    """
    Base error of the work tree core.
    Invalid usage always surfaces as one of the subclasses below,
    never as a silent wrong number.
    """


class InvalidArgumentError(WorkTreeError, ValueError):
    """
    Missing duration / start / end passed to update_duration,
    or an incoherent range (to < from).
    """


class InvalidStateError(WorkTreeError):
    """
    Operation not allowed in the current lifecycle state
    (e.g. stop() on an interval that is already stopped).
    """


class StructuralViolationError(WorkTreeError):
    """
    Attachment that would break the tree: a cycle, self-attachment,
    or re-parenting a job that already has a parent.
    """
