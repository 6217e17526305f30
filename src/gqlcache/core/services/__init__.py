"""Domain services for gqlcache."""

from gqlcache.core.services.decision_service import AUTH_HEADER, CacheDecisionService
from gqlcache.core.services.directive_policy import DirectivePolicy
from gqlcache.core.services.normalizer import normalize, strip_locations

__all__ = [
    "AUTH_HEADER",
    "CacheDecisionService",
    "DirectivePolicy",
    "normalize",
    "strip_locations",
]
