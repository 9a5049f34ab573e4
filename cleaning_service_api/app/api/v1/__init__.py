"""Version 1 of the Cleaning Service API."""
