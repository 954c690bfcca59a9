"""
Feature modules for the Trak backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's storage and collaborators
- models.py: Pydantic models for data transfer
- repository.py / store.py: In-memory and Supabase storage variants
- service.py: Business logic implementation
- routes.py: FastAPI route handlers
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
