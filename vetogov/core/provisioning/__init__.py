from vetogov.core.provisioning.resolver import TokenProvisioningResolver, TokenResolution, TokenResolutionKind

__all__ = ["TokenProvisioningResolver", "TokenResolution", "TokenResolutionKind"]
