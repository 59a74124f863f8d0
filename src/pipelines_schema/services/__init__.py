"""Services package for pipelines-schema.

This package provides all services using the plugin dependency injection pattern from scitrera-app-framework.

Prefer importing from specific service submodules (e.g., `from .resolution import get_resolution_service`)
rather than from this top-level package.
"""
