"""
Application layer: ports, notification templates and the lifecycle services.
"""
