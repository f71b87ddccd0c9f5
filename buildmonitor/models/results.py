"""Build outcome classification."""

from __future__ import annotations

from enum import Enum


class Result(str, Enum):
    """Terminal outcome of a completed build, ordered best to worst.

    A build that is still running has no result yet and reports ``None``
    instead of a member of this enum.  Only ``SUCCESS`` counts as good.
    """

    SUCCESS = "success"
    UNSTABLE = "unstable"
    FAILURE = "failure"
    NOT_BUILT = "not_built"
    ABORTED = "aborted"
