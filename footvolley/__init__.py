"""Footvolley roster manager and balanced team draw."""
