"""Notifications: factory-selected channel handlers.

Email, SMS, push and Slack handlers share one contract and are looked up by
channel. Delivery is simulated; each handler validates the recipient and
message limits of its channel and prices the send.
"""
