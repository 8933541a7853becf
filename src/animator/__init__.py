"""Photo animation relay service and its upload client."""
