# =============================================================================
# Django Project Configuration Package
# =============================================================================
# Settings, URLs and the ASGI/WSGI entry points.
# =============================================================================
