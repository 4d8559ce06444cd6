"""HTML page rendering for compiled documents."""
