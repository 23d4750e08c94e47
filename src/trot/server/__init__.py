"""Server side of trot: dispatch pipeline, error funnel, ASGI glue, transport."""
