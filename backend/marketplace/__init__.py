"""REST client, record models and view-models for the marketplace."""
