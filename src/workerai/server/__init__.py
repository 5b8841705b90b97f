"""HTTP/WebSocket server exposing the agent to browser frontends."""
