"""
Core Application - shared infrastructure.

Generic building blocks used by the domain apps; no messaging logic lives
here.

Models (core.models):
    - BaseModel: Abstract model with created_at / updated_at

Services (core.services):
    - ServiceResult: Typed success/failure wrapper
    - BaseService: Logging, transaction and exception helpers

Exceptions (core.exceptions):
    - BaseApplicationError, ValidationError, NotFoundError

Views (core.views):
    - health_check: Database liveness probe
"""
