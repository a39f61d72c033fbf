"""Business logic services.

Services contain all business logic and are called by routes.
Services are deterministic where possible and accept dependencies (the
record store) explicitly.
"""
