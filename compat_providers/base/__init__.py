"""Foundation layer: errors, logging, configuration-backed timeouts, HTTP,
credentials, DTOs and the request pipeline.

Import from the submodules (``compat_providers.base.errors`` and so on);
this package module does not import them eagerly.
"""
