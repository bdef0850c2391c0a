"""HTTP API for the Patient Service."""
