"""Application services (use cases) orchestrating repositories and ports."""
