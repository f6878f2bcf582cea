"""Shared building blocks: record field readers and the Protocols the services depend on."""
