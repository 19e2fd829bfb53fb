"""Flask API for the ESHS compliance dashboard."""
