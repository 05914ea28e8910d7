"""Interactive console front end."""
