"""Liveness and readiness probes.

Usage
-----
Import health resources for route registration::

    from synergy.api.health.resources import HealthResource, ReadyResource
"""
