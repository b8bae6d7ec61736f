"""HTTP middleware for page resolution, auth, CORS and request logging."""
