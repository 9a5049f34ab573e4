"""
Pydantic schema definitions for API payloads.

Each domain (users, services, bookings) defines its own Pydantic
models for request and response bodies.  Schemas are separated from
the SQL in ``services`` to decouple API representation from
persistence.
"""
