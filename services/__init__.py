"""
Services module for RescueLink Backend.

Contains the request workflows and external service integrations.
"""
