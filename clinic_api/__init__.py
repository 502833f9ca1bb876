"""Clinic backend: users, appointments, medical records and billings over REST."""

__version__ = "1.0.0"
