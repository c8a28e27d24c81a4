"""REST API for the CV composer."""
