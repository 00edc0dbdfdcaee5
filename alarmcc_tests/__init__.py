"""Tests for alarmcc."""
