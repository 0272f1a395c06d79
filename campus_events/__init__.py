"""Campus events directory: event discovery, reporting, and moderation service."""
