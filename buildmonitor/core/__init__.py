"""Read contracts and time sources the job view is computed against."""
