"""
Service layer.

Each service encapsulates the business logic for one concern and
receives the store it works on at construction time, so the API
handlers and the tests can supply whichever store they need.
"""
