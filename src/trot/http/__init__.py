"""HTTP primitives handed to handlers: request, response writer, URL parsing."""
