"""Clients for the live weather and air-quality endpoints."""
