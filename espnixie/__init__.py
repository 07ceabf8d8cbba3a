"""Nixie clock logic: tube encoding, LED strip and effects, hourly history, task scheduling, logging and nearby sensor data."""

__version__ = "0.1.0"