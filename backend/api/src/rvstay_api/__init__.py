"""REST API for the RV Stay marketplace."""
