"""Logging helpers for the portfolio analyzer."""
