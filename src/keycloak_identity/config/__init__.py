"""Configuration for keycloak-identity-provider.

Import from the submodules (settings, logging_config, constants) directly.
"""
