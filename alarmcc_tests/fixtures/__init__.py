"""Fixtures for the alarmcc tests."""
