"""
Business layer for the warehouse admin dashboard.
Session ownership, route guarding, sidebar state and viewport classification,
kept free of Flask request handling.
"""
