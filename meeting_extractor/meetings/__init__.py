"""Meeting summary parsing and aggregation."""
