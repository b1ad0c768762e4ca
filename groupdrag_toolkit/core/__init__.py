"""Core order-key model: pure functions and services, no UI code."""
