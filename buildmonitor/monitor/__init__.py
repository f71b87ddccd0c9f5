"""Build monitor job views.

Modules
-------
job_view
    ``JobView`` derives status, progress, culprits, changes and downstream
    jobs from a job's build history and produces ``JobStatus`` snapshots.
renderer
    ``MonitorRenderer`` turns ``JobStatus`` trees into Rich renderables for
    terminal display, including continuous ``Rich.Live`` mode.
"""

from buildmonitor.monitor.job_view import JobStatus, JobView

__all__ = ["JobStatus", "JobView"]
