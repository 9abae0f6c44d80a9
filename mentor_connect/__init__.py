"""Mentor Connect: mentor/mentee profiles, discovery and connection requests over a FastAPI API."""
