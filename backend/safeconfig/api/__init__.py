"""HTTP surface: routes and response classes."""
