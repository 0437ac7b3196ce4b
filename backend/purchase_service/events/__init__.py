"""In-process domain events: sequential fan-out to registered handlers."""
