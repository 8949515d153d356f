"""Web package - JSON dashboard API for the admin panel."""
