"""Shared helpers for FlowCanvas."""
