"""SiPPKe notification service.

Stores in-app notifications for school staff and pushes them to their
devices when a new incident report arrives.
"""
