"""Dental product catalog service."""
