"""Endless River Ride -- a scrolling river-rafting game for the terminal."""
