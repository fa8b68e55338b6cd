"""HTTP and WebSocket front end driving game sessions."""
