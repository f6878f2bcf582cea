"""Front ends that drive the command registry (currently: interactive console)."""
