from .principal import AuthenticatedPrincipal, principal_from_token

__all__ = ["AuthenticatedPrincipal", "principal_from_token"]
