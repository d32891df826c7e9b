"""Discord-moderated cache of Hashnode blog posts with a small read API."""
