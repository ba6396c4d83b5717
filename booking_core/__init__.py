"""Appointment booking core: slot availability, booking and moderation workflows."""

__version__ = "0.1.0"
