"""HTTP API for the cost estimator."""
