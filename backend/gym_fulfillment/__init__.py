# backend/gym_fulfillment/__init__.py
"""
Action Gym fulfillment backend package.

This package contains:
- main: FastAPI application entrypoint
- conversation: webhook request/response handling and intent dispatch
- schedule: weekly class schedule lookup
- subscriptions: push notification opt-in recording
- notifications: push notification fan-out via the Actions API
- fulfillment: intent handlers and the /fulfillment endpoint
"""
