"""HTTP routers for the weather service."""
