"""buildmonitor: job health views for build dashboards.

Derives a point-in-time view of a build job for a dashboard:
  - aggregate status, with failures propagated up from downstream jobs
  - progress of the running build against its estimated duration
  - culprits of the current failure streak
  - change summary of the latest build
  - downstream jobs, recursively rendered as the same view
"""

__version__ = "0.1.0"
__description__ = "Job health views for build dashboards"

from buildmonitor.monitor.job_view import JobStatus, JobView

__all__ = ["JobStatus", "JobView", "__version__"]
