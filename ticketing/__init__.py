"""Bus ticketing backend: fare computation and bus search."""
