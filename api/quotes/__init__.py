"""
Quote CRUD feature: schemas, SQL, business logic and routes.
"""
