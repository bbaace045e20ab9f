"""Core services: API transport, signing, uploads and tasks."""
