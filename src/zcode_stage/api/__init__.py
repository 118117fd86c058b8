"""HTTP and WebSocket API for Z-Code Stage."""
