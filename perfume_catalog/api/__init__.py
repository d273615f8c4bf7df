"""HTTP routers for the perfume catalog API."""
