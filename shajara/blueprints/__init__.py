"""
Flask blueprints
"""
