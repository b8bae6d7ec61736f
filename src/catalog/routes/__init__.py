"""API routers mounted under the API prefix."""
