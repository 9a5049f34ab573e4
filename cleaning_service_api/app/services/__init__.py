"""
Service layer abstraction.

Each service encapsulates the business logic and SQL for one domain.
Services raise ``ValueError`` for invalid input and ``LookupError``
for rows that do not exist or are not visible to the caller; the API
handlers translate these into HTTP errors.
"""
