"""
Museum Curator Planner

Dashboard backend for a solo museum curator: urgency scoring, daily
energy-slot scheduling, budget and analytics summaries.
"""

__version__ = "1.0.0"
