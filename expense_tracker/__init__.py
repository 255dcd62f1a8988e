"""Personal expense tracker API."""
