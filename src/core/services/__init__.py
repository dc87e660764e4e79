"""Application services (use cases) built on the core."""
