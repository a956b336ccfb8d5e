"""
API Routes - HTTP endpoint handlers

Each domain area (attributes, configurations, impulses, states, engine)
gets its own router; all are included in the main app under /api/v1.
"""
