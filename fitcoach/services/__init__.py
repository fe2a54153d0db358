"""
Service layer for the FitCoach core.
"""
