"""Domain layer for fintrack application.

Services live in their own modules (``fintrack.domain.account`` and friends)
and are imported from there, so the storage layer can depend on
``fintrack.domain.entities`` without importing the services back.
"""
