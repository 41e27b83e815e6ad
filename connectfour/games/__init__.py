"""Game rules and board representations."""
