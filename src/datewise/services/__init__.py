"""Service layer — date operations returning ServiceResult.

Services may import from the domain layer only.
They must never import from commands, output, or config.
"""
