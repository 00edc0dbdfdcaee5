"""Command line interface for alarmcc."""
