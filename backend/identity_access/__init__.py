"""Identity and session handling for the marketplace client."""
