"""Pydantic models of the bodies returned by the application's exception handlers."""
