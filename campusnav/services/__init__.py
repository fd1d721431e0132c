"""Services - auth, building catalog and schedule store logic."""
